"""Logging utilities for structured JSON logging with TRACE level support."""

import json
import logging
import logging.handlers
import sys
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Generator, Optional

# Add TRACE level
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def trace(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    """Log a message with severity 'TRACE'."""
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


# Add trace method to Logger class
logging.Logger.trace = trace  # type: ignore[attr-defined]

# Thread-local storage for correlation IDs and operation names
_context = threading.local()

_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "correlation_id",
    "operation",
}


class ContextFilter(logging.Filter):
    """Filter to add correlation ID and operation name to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context information to the log record."""
        record.correlation_id = getattr(_context, "correlation_id", None)
        record.operation = getattr(_context, "operation", None)
        return True


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def __init__(self, include_traceback: bool = True) -> None:
        """Initialize JSON formatter.

        Args:
            include_traceback: Whether to include traceback in error logs
        """
        super().__init__()
        self.include_traceback = include_traceback

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if getattr(record, "correlation_id", None):
            log_entry["correlation_id"] = record.correlation_id

        if getattr(record, "operation", None):
            log_entry["operation"] = record.operation

        # Anything passed via extra=
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if context:
            log_entry["context"] = context

        if record.exc_info and self.include_traceback:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        # ensure_ascii=False keeps the micro sign readable
        return json.dumps(log_entry, default=str, ensure_ascii=False)


def setup_logging(
    log_level: str = "WARNING",
    log_file: Optional[Path] = None,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    console_output: bool = True,
    json_format: bool = True,
) -> None:
    """Set up logging configuration.

    Args:
        log_level: Logging level
        log_file: Optional log file path; no file handler when None
        max_file_size: Maximum size of log files before rotation
        backup_count: Number of backup files to keep
        console_output: Whether to output logs to stderr
        json_format: Whether to use JSON formatting for the log file
    """
    if log_level.upper() == "TRACE":
        numeric_level = TRACE_LEVEL
    else:
        numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    context_filter = ContextFilter()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)

        if json_format:
            file_formatter: logging.Formatter = JSONFormatter(include_traceback=True)
        else:
            file_formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        file_handler.setFormatter(file_formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    if console_output:
        # stdout is reserved for formatted durations
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
            )
        )
        root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


@contextmanager
def operation_context(
    operation: str, correlation_id: Optional[str] = None
) -> Generator[str, None, None]:
    """Context manager that tags log records with an operation name.

    Args:
        operation: Operation name
        correlation_id: Correlation ID (generates UUID if None)

    Yields:
        The correlation ID
    """
    old_correlation_id = getattr(_context, "correlation_id", None)
    old_operation = getattr(_context, "operation", None)

    actual_correlation_id = correlation_id or str(uuid.uuid4())
    _context.correlation_id = actual_correlation_id
    _context.operation = operation
    try:
        yield actual_correlation_id
    finally:
        _context.correlation_id = old_correlation_id
        _context.operation = old_operation
