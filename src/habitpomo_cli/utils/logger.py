"""Logging setup for habitpomo-cli.

Core modules log through ``logging.getLogger(__name__)`` and never touch
handlers. Their records climb to the ``habitpomo_cli`` package logger,
which this module points at a rotating file in ``user_log_dir``. The CLI
calls ``configure_logging`` once per run with the configured level;
anything that logs earlier gets the default level.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

PACKAGE_LOGGER = "habitpomo_cli"
LOG_FILE = "habitpomo.log"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LEVEL = "INFO"

_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def log_path() -> Path:
    return Path(user_log_dir(PACKAGE_LOGGER)) / LOG_FILE


def configure_logging(level: str = DEFAULT_LEVEL) -> logging.Logger:
    """Attach the file handler to the package logger and set its level.

    Safe to call again: the level is updated and the handler is only
    created once.

    Raises:
        ValueError: If *level* is not one of LOG_LEVELS
    """
    global _logger
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _logger is None:
        path = log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        logger.addHandler(handler)
        # The file is the only sink; keep records off the terminal
        logger.propagate = False
        _logger = logger

    logger.setLevel(level)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger (or a child of it), configuring on first use."""
    if _logger is None:
        configure_logging()
    if name:
        return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
    return logging.getLogger(PACKAGE_LOGGER)
