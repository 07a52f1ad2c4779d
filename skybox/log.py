"""Logging setup: console plus a rotating file, short level names."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from datetime import datetime

LOGGER_NAME = "skybox"
TRACE = 5
LOG_FILE_SIZE = 50 * 1024 * 1024
LOG_FILE_COUNT = 5

logging.addLevelName(TRACE, "TRACE")

_SHORT_NAMES = {
    TRACE: "TRC",
    logging.DEBUG: "DBG",
    logging.INFO: "INF",
    logging.WARNING: "WRN",
    logging.ERROR: "ERR",
    logging.CRITICAL: "CTL",
}

_LEVELS = {
    "debug": logging.DEBUG,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "err": logging.ERROR,
    "error": logging.ERROR,
    "trace": TRACE,
}

logger = logging.getLogger(LOGGER_NAME)


class _Formatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.short_level = _SHORT_NAMES.get(record.levelno, record.levelname[:3])
        return super().format(record)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created).strftime("%Y%m%d %H:%M:%S.%f")


_FORMAT = "%(asctime)s %(thread)d %(short_level)s %(message)s %(filename)s:%(lineno)d"


def init_log(filename) -> None:
    """Send the package's log records to stdout and a rotating file, at info level."""
    shutdown_log()
    formatter = _Formatter(_FORMAT)
    handlers = [
        logging.StreamHandler(sys.stdout),
        logging.handlers.RotatingFileHandler(
            filename, maxBytes=LOG_FILE_SIZE, backupCount=LOG_FILE_COUNT, encoding="utf-8"
        ),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)


def set_log_level(level: str) -> None:
    """Set the level by name; unknown names mean info."""
    logger.setLevel(_LEVELS.get(level, logging.INFO))


def shutdown_log() -> None:
    """Flush and close every handler installed on the package logger."""
    for handler in list(logger.handlers):
        handler.flush()
        handler.close()
        logger.removeHandler(handler)