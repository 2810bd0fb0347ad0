import logging
import os


def build_logging_config(level=logging.INFO, log_file=None) -> dict:
    """dictConfig for the app and job scripts; optional rotating file."""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": level,
        },
    }
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "standard",
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": 5,
            "level": logging.INFO,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s",
            },
        },
        "handlers": handlers,
        "loggers": {
            # Connector internals are noisy at DEBUG.
            "mysql.connector": {"level": logging.WARNING},
        },
        "root": {
            "handlers": list(handlers),
            "level": level,
        },
    }
