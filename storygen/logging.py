"""Logging setup for the storygen command line."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "storygen"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ProgressFormatter(logging.Formatter):
    """Per-file progress lines stay bare; anything louder carries its level."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            return f"[storygen] {message}"
        formatted = f"[storygen] {record.levelname} {message}"
        if record.exc_info:
            formatted = f"{formatted}\n{self.formatException(record.exc_info)}"
        return formatted


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a child of the ``storygen`` logger, e.g. ``storygen.orchestrator``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach console progress output and, optionally, a full-detail log file.

    ``quiet`` limits the console to warnings; the log file always records
    debug detail so failed files can be inspected after a batch.
    """
    console_level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    # Repeated main() calls in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_ProgressFormatter())
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
