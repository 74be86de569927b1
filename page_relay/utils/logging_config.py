"""
Logging setup for Page Relay.

Every component gets a named logger writing to stdout and, when ./logs is
writable, to a rotating file. Graph API errors echo request URLs, so page
access tokens are masked before any record is written.
"""

import os
import re
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_TOKEN_PATTERN = re.compile(r"(access_token=)[^&\s'\"]+")


def _env_flag(key: str) -> bool:
    return os.getenv(key, "false").strip().lower() in ("true", "1")


def _env_int(key: str, default: int, min_val: int, max_val: int) -> int:
    """Integer from the environment, falling back to default when invalid or out of range"""
    try:
        value = int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default
    return value if min_val <= value <= max_val else default


SEPARATE_LOG_FILES = _env_flag("SEPARATE_LOG_FILES")
LOG_LEVEL = _env_int("LOG_LEVEL", logging.INFO, logging.NOTSET, logging.CRITICAL)
MAX_BYTES = _env_int("LOG_MAX_BYTES", 10 * 1024 * 1024, 1024 * 1024, 100 * 1024 * 1024)
BACKUP_COUNT = _env_int("LOG_BACKUP_COUNT", 5, 1, 20)


def _prepare_logs_dir() -> Optional[Path]:
    logs_dir = Path(os.getenv("LOGS_DIR", "logs"))
    try:
        logs_dir.mkdir(exist_ok=True)
    except OSError as e:
        print(f"Warning: Cannot create logs directory {logs_dir.absolute()}: {e}. Logs will only go to stdout.")
        return None
    return logs_dir


LOGS_DIR = _prepare_logs_dir()


def mask_access_tokens(text: str) -> str:
    return _TOKEN_PATTERN.sub(r"\1***", text)


class AccessTokenFilter(logging.Filter):
    """Mask access_token query values in log messages"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_access_tokens(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def get_log_file_path(component: str = "app") -> Optional[str]:
    """Absolute path of the file a component logs to, or None when file logging is off"""
    if not LOGS_DIR:
        return None
    log_file = f"{component}.log" if SEPARATE_LOG_FILES else "app.log"
    return str(LOGS_DIR.absolute() / log_file)


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a component.

    Handlers are attached once; later calls return the same logger untouched.
    """
    logger = logging.getLogger(component)
    if logger.hasHandlers():
        return logger

    logger.setLevel(LOG_LEVEL)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    token_filter = AccessTokenFilter()

    log_path = get_log_file_path(component)
    if log_path:
        try:
            file_handler = RotatingFileHandler(log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(token_filter)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: Cannot create log file {log_path}: {e}")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(token_filter)
    logger.addHandler(console_handler)

    return logger


def get_app_logger() -> logging.Logger:
    return get_logger("app")


def get_api_logger() -> logging.Logger:
    return get_logger("api")
