"""Runtime configuration for fraghtml.

Settings come from the environment:

- ``FRAGHTML_LOG_LEVEL``: level name for fraghtml loggers (default WARNING).
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "FRAGHTML_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def log_level() -> int:
    """Return the configured log level, falling back to the default on bad input."""
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.getLevelName(DEFAULT_LOG_LEVEL)
    return level


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name"""
    return logging.getLogger(name)


def configure_logging(level: int | None = None) -> None:
    """Install a stream handler on the root logger (used by the CLI)."""
    logging.basicConfig(level=log_level() if level is None else level, format=LOG_FORMAT)
