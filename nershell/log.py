"""Logging bootstrap for the shell.

Modules log through ``logging.getLogger(__name__)``; this module only wires
handlers on the ``nershell`` package logger: a stderr stream handler and an
optional size-rotated log file.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

PACKAGE_LOGGER = "nershell"
DEFAULT_LEVEL = "WARNING"
CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 3

_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def level_names() -> tuple[str, ...]:
    return ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_level(name: str | None) -> int:
    """Map a level name to a ``logging`` constant, defaulting to WARNING."""
    if not name:
        return logging.WARNING
    return _LEVELS.get(str(name).strip().upper(), logging.WARNING)


def configure_logging(level: str | None = DEFAULT_LEVEL, log_file: Path | None = None) -> logging.Logger:
    """Install handlers on the package logger, replacing earlier ones.

    The console handler honors ``level``; the file handler, when enabled,
    records everything from INFO upward.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = parse_level(level)
    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    effective = console_level
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_level = min(console_level, logging.INFO)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)
        effective = min(effective, file_level)

    logger.setLevel(effective)
    logger.propagate = False
    return logger


__all__ = [
    "PACKAGE_LOGGER",
    "DEFAULT_LEVEL",
    "level_names",
    "parse_level",
    "configure_logging",
]
