"""Application-wide logger.

Everything logs through the ``taskboard`` logger, which writes to a rotating
file under the platform log directory. ``taskboard serve --verbose`` also
mirrors records to stderr.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "taskboard"
LOG_LEVEL_ENV = "TASKBOARD_LOG_LEVEL"

_LOG_FILE = "taskboard.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_log_path() -> Path:
    """Path of the log file for this user."""
    return Path(user_log_dir(LOGGER_NAME)) / _LOG_FILE


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call."""
    global _logger
    if _logger is not None:
        return _logger

    log_path = get_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_env())
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def enable_console_logging(level: int = logging.INFO) -> logging.Handler:
    """Mirror application log records to stderr."""
    logger = get_logger()
    for existing in logger.handlers:
        if getattr(existing, "name", None) == "console":
            return existing
    console = logging.StreamHandler(sys.stderr)
    console.set_name("console")
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(levelname)-8s %(message)s"))
    logger.addHandler(console)
    return console
