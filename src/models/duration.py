"""Duration data model."""

from dataclasses import dataclass
from datetime import timedelta

from ..exceptions import DurationError
from ..utils.logging import get_logger
from ..utils.time_format import (
    MAX_SECONDS,
    NANOS_PER_SECOND,
    check_duration_range,
    format_duration,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Duration:
    """A non-negative span of time as whole seconds plus sub-second nanos."""

    seconds: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        """Validate the duration after initialization."""
        logger.trace(  # type: ignore[attr-defined]
            f"Validating Duration seconds={self.seconds} nanos={self.nanos}"
        )
        try:
            check_duration_range(self.seconds, self.nanos)
        except DurationError as e:
            logger.debug(f"Duration validation failed: {e}")
            raise

    @classmethod
    def from_nanos(cls, total_nanos: int) -> "Duration":
        """Create a duration from a total nanosecond count.

        Args:
            total_nanos: Non-negative number of nanoseconds

        Returns:
            Duration with the count split into seconds and nanos

        Raises:
            DurationError: If the count is negative or too large
        """
        if isinstance(total_nanos, bool) or not isinstance(total_nanos, int):
            raise DurationError(
                "total_nanos must be an integer", {"total_nanos": repr(total_nanos)}
            )
        if total_nanos < 0:
            raise DurationError(
                "Negative durations are not supported", {"total_nanos": total_nanos}
            )

        seconds, nanos = divmod(total_nanos, NANOS_PER_SECOND)
        return cls(seconds, nanos)

    @classmethod
    def from_timedelta(cls, duration: timedelta) -> "Duration":
        """Create a duration from a timedelta (microsecond resolution)."""
        if duration < timedelta(0):
            raise DurationError(
                "Negative durations are not supported", {"duration": str(duration)}
            )
        return cls(
            duration.days * 86400 + duration.seconds,
            duration.microseconds * 1_000,
        )

    @property
    def total_nanos(self) -> int:
        """Total length of the duration in nanoseconds."""
        return self.seconds * NANOS_PER_SECOND + self.nanos

    @property
    def is_zero(self) -> bool:
        """Check if this is the zero duration."""
        return self.seconds == 0 and self.nanos == 0

    def to_timedelta(self) -> timedelta:
        """Convert to a timedelta, truncating to microseconds.

        Raises:
            OverflowError: If the duration exceeds timedelta.max
        """
        return timedelta(seconds=self.seconds, microseconds=self.nanos // 1_000)

    def format(self) -> str:
        """Format as a compact string, e.g. "1h2m3.5s"."""
        return format_duration(self.seconds, self.nanos)

    def __str__(self) -> str:
        return self.format()


ZERO = Duration()
MAX = Duration(MAX_SECONDS, NANOS_PER_SECOND - 1)
