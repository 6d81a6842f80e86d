"""Utility functions for durationfmt."""

from .logging import (
    TRACE_LEVEL,
    get_logger,
    operation_context,
    setup_logging,
)
from .time_format import (
    MAX_SECONDS,
    NANOS_PER_SECOND,
    format_duration,
    format_timedelta,
)

__all__ = [
    # Logging utilities
    "TRACE_LEVEL",
    "get_logger",
    "operation_context",
    "setup_logging",
    # Time formatting utilities
    "MAX_SECONDS",
    "NANOS_PER_SECOND",
    "format_duration",
    "format_timedelta",
]
