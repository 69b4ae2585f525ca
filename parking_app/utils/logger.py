# parking_app/utils/logger.py
"""
Logging setup shared by the API, the polling client and the scripts.
Console output plus a size-rotated file under LOG_DIR (repo-root logs/ by default).
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from parking_app.config import settings

DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# httpx logs every poll at INFO; SQLAlchemy echoes statements when its own level drops.
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")

_configured = False


def build_handlers(level: str, log_dir: Optional[str] = None,
                   filename: Optional[str] = None) -> List[logging.Handler]:
    log_dir = log_dir or settings.LOG_DIR or DEFAULT_LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    file_handler = RotatingFileHandler(
        filename=os.path.join(log_dir, filename or settings.LOG_FILE),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    for handler in (console, file_handler):
        handler.setLevel(level)
        handler.setFormatter(fmt)
    return [console, file_handler]


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    root = logging.getLogger()
    root.setLevel(level)
    for handler in build_handlers(level):
        root.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
