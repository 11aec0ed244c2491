"""Structured logging for frame graph configuration and resolution.

Console output is human readable; an optional file handler writes JSON lines
so that resolution traces can be inspected after a build.
"""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "framegraph"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_data = {
            "timestamp": time.time(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        # Structured payload attached by StructuredLogger
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


def setup_logging(log_path: Path | None = None, level: int = logging.INFO) -> None:
    """Setup console and optional JSON lines logging for the package.

    Args:
        log_path: Optional path for JSON lines log file
        level: Logging level
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    )
    logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)


def get_logger(name: str) -> "StructuredLogger":
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(logging.getLogger(name))


class StructuredLogger:
    """Wrapper for adding structured data to log messages.

    Instances are passed explicitly to Configuration and TransformationManager
    so that callers control where resolution traces go.
    """

    def __init__(self, logger: logging.Logger):
        """Initialize with a standard logger."""
        self.logger = logger

    @property
    def name(self) -> str:
        """Name of the wrapped logger."""
        return self.logger.name

    def _log(self, level: int, msg: str, data: dict[str, Any] | None = None) -> None:
        """Log with structured data."""
        if not self.logger.isEnabledFor(level):
            return
        extra = {"extra_data": data} if data else {}
        self.logger.log(level, msg, extra=extra)

    def debug(self, msg: str, data: dict[str, Any] | None = None) -> None:
        """Debug level log."""
        self._log(logging.DEBUG, msg, data)

    def info(self, msg: str, data: dict[str, Any] | None = None) -> None:
        """Info level log."""
        self._log(logging.INFO, msg, data)


__all__ = [
    "ROOT_LOGGER_NAME",
    "setup_logging",
    "get_logger",
    "StructuredLogger",
    "JSONFormatter",
]
