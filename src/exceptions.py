"""Common base exception classes for durationfmt.

This module provides the base exception class that all durationfmt exceptions
inherit from, plus the error raised when a duration value breaks the
formatter's input contract.
"""

from typing import Any, Dict, Optional


class DurationFmtError(Exception):
    """Base exception for all durationfmt errors.

    Attributes:
        context: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Initialize the error.

        Args:
            message: The error message
            context: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        base_message = super().__str__()
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_message} (context: {context_str})"
        return base_message


class DurationError(DurationFmtError, ValueError):
    """Raised when seconds or nanoseconds fall outside the supported range."""

    pass
