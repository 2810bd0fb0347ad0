import logging
import os

from config.logging_config import build_logging_config

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_backoffice_test"),
    "connect_timeout": 2,
}

TIMEZONE = "Asia/Karachi"

ABSENCE_WARNING_WINDOW = 10
ATTENDANCE_RETENTION_MONTHS = 6
BATCH_SIZE = 2

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

LOGGING = build_logging_config(logging.WARNING)
