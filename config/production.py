import logging
import os

from config.logging_config import build_logging_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_backoffice"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

TIMEZONE = os.getenv("TIMEZONE", "Asia/Karachi")

ABSENCE_WARNING_WINDOW = int(os.getenv("ABSENCE_WARNING_WINDOW", "10"))
ATTENDANCE_RETENTION_MONTHS = int(os.getenv("ATTENDANCE_RETENTION_MONTHS", "6"))
BATCH_SIZE = int(os.getenv("BATCH_SIZE", "100"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

LOGGING = build_logging_config(logging.INFO, log_file=os.getenv("LOG_FILE", "logs/hr_backoffice.log"))
