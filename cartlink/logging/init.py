from __future__ import annotations

import logging
import sys

"""Application logger for cartlink.

Lines are written to stdout as "<LABEL> <message>" with the labels
INFO / WARN / ERROR / SUMMARY (DEBUG with --debug). Service modules log via
logging.getLogger(__name__) and reach the handler as children of "cartlink".
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "enable_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
    "setup_logging",
]

APP_LOGGER_NAME = "cartlink"

# SUMMARY は INFO(20) と WARNING(30) の間
SUMMARY_LEVEL = 25

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    SUMMARY_LEVEL: "SUMMARY",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
}

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formats a record as "<LABEL> <message>", traceback on following lines."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{_LABELS.get(record.levelno, record.levelname)} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging() -> logging.Logger:
    """Install the stdout handler on the "cartlink" logger once and return it."""
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.INFO)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def enable_debug(logger: logging.Logger) -> None:
    """Let DEBUG records (dropped rows, stale outcomes) through to stdout."""
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() starts over (tests)."""
    global _logger
    _logger = None
