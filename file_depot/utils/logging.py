"""Logging for the file depot client.

Records go through the ``file_depot`` logger hierarchy. Every handler
set up here redacts depot passwords and URI credentials before a
message is written.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "file_depot"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PII_PATTERNS = [
    (re.compile(r'(password["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'(passwd["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    # user:password@ in depot URIs
    (re.compile(r'ftp://[^:/@\s]+:[^@\s]+@', re.IGNORECASE), 'ftp://[REDACTED]@'),
    # Keep the network part of IPv4 addresses
    (re.compile(r'(\d+\.\d+\.)\d+\.\d+'), r'\1*.*'),
]


def redact(message: str) -> str:
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class PIIRedactingFormatter(logging.Formatter):
    """Formatter whose output has passed through ``redact``."""

    def format(self, record: logging.LogRecord) -> str:
        return redact(super().format(record))


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(PIIRedactingFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """
    Route depot log records to stdout and/or ``log_file``.

    Handlers from an earlier call are replaced, so calling this again
    reconfigures logging instead of duplicating output. The parent
    directory of ``log_file`` is created if needed.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    if console:
        _attach(logger, logging.StreamHandler(sys.stdout), level)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """The package logger, or its ``name`` child (``"depot"`` gives ``file_depot.depot``)."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)
