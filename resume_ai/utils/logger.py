"""Logging configuration for the resume extraction service."""

import logging
import os
import sys
from typing import Any, Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _default_level() -> int:
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a configured logger instance (stdout, level from LOG_LEVEL unless given)."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_default_level())
    if level is not None:
        logger.setLevel(level)
    return logger


def format_fields(**fields: Any) -> str:
    """Render keyword fields as a ``key=value`` suffix; None values are skipped."""
    return " ".join(f"{key}={value}" for key, value in fields.items() if value is not None)
