"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "taskman_cli"
_LOG_FILE = "taskman.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Where the rotating log file lives for the current user."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _file_handler(
    logger: logging.Logger,
) -> logging.handlers.RotatingFileHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            return handler
    return None


def _build_file_handler(path: Path) -> logging.handlers.RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call.

    The logger never propagates to the root logger so that diagnostics do not
    bleed into the terminal while the full-screen UI is running. Handlers
    other people attach (a test harness capturing records, say) are left
    alone; only the rotating file handler is owned here.
    """
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if _file_handler(logger) is None:
        logger.addHandler(_build_file_handler(log_file_path()))
    logger.propagate = False

    _logger = logger
    return _logger


def close_logger() -> None:
    """Detach and close the file handler so the next get_logger() starts fresh."""
    global _logger
    logger = logging.getLogger(_APP_NAME)
    handler = _file_handler(logger)
    if handler is not None:
        logger.removeHandler(handler)
        handler.close()
    _logger = None
