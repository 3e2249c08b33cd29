"""Package logger for underbar.

Importing the package only attaches a ``NullHandler``; records propagate to
whatever the application configures. ``setup_logger`` is an opt-in console
setup for scripts that want underbar's debug output directly.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import load_config

__all__ = ["logger", "setup_logger", "get_logger"]


def setup_logger(
    name: str = "underbar",
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (the package name for the root package logger)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); defaults to
            ``UNDERBAR_LOG_LEVEL`` or WARNING
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    level = level or load_config().log_level
    format_string = format_string or (
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        logger.propagate = False

    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Child logger of the package logger, e.g. ``underbar.scheduler``."""
    return logger.getChild(module_name.rsplit(".", 1)[-1])


logger = logging.getLogger("underbar")
logger.addHandler(logging.NullHandler())
