from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Console logging for the checker.

Every line the checker prints starts with one label out of
DEBUG / INFO / WARN / ERROR / SUMMARY, so wrapper scripts can grep the
SUMMARY line and the error messages. Standard logging only; service modules
use logging.getLogger(__name__) and reach the package handler through
propagation.
"""

__all__ = [
    "setup_logging",
    "set_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
    "LabeledFormatter",
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
]

LOGGER_NAME = "datasheet_checker"

# INFO(20) と WARNING(30) の間
SUMMARY_LEVEL = 25

LEVEL_LABELS: dict[int, str] = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
    SUMMARY_LEVEL: "SUMMARY",
}

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Render records as "<LABEL> <message>" (WARNING is shortened to WARN)."""

    def format(self, record: logging.LogRecord) -> str:
        label = LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach a single labeled stdout handler to the package logger.

    Safe to call repeatedly: the first configured logger is returned until
    reset_logging() is called.
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(LabeledFormatter())
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    # root へ流すと二重出力になる
    logger.propagate = False

    _logger = logger
    return logger


def set_debug(logger: logging.Logger) -> None:
    """Lower logger and handler levels to DEBUG (--debug)."""
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def log_summary(fields: str) -> None:
    """Emit the run summary; the SUMMARY label is added by the formatter."""
    get_logger().log(SUMMARY_LEVEL, fields)


def reset_logging() -> None:
    """Forget the configured logger (tests re-run setup against a fresh capsys)."""
    global _logger
    _logger = None
