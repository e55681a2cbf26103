"""
utils/logger.py
---------------
Logging setup shared by every module.

Modules call `get_logger(__name__)`. The root logger gets one stdout
handler on first use; its level and format come from config and can be
re-applied with `configure_logging()`.
"""

import logging
import sys
from typing import Optional

import config

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> logging.Handler:
    """
    Set the root level and attach the stdout handler if it is missing.

    Args:
        level: Level name; defaults to config.LOG_LEVEL.

    Returns:
        The handler owned by this module.
    """
    global _handler
    root = logging.getLogger()
    root.setLevel((level or config.LOG_LEVEL).upper())
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(config.LOG_FORMAT, config.LOG_DATE_FORMAT))
    if _handler not in root.handlers:
        root.addHandler(_handler)
    return _handler


def get_logger(name: str) -> logging.Logger:
    if _handler is None:
        configure_logging()
    return logging.getLogger(name)
