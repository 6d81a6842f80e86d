"""Time formatting utilities.

Durations are printed the way Go's ``time.Duration.String()`` prints them,
e.g. ``72h3m0.5s``. Leading zero units are omitted. Durations shorter than
one second use a smaller unit (``ms``, ``µs`` or ``ns``) so the leading digit
is non-zero. The zero duration formats as ``0s``.
"""

from datetime import timedelta
from typing import Tuple

from ..exceptions import DurationError
from .logging import get_logger

logger = get_logger(__name__)

NANOS_PER_SECOND = 1_000_000_000
MAX_SECONDS = 2**64 - 1

MICRO_SIGN = "µ"


def _format_fraction(value: int, precision: int) -> Tuple[str, int]:
    """Format the fraction of value / 10**precision, e.g. ".12345".

    Trailing zeros are omitted, and so is the decimal point when the
    fraction is zero.

    Args:
        value: Non-negative integer holding the fractional digits
        precision: Number of low-order digits of value that form the fraction

    Returns:
        Tuple of (fraction string, value // 10**precision)
    """
    if precision == 0:
        return "", value

    scale = 10**precision
    quotient, remainder = divmod(value, scale)
    digits = f"{remainder:0{precision}d}".rstrip("0")
    if not digits:
        return "", quotient
    return f".{digits}", quotient


def _format_integer(value: int) -> str:
    """Format a non-negative integer as decimal digits."""
    return str(value)


def check_duration_range(seconds: int, nanos: int) -> None:
    """Raise DurationError unless (seconds, nanos) is a valid duration."""
    for name, value in (("seconds", seconds), ("nanos", nanos)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise DurationError(
                f"{name} must be an integer", {name: repr(value)}
            )

    if seconds < 0 or seconds > MAX_SECONDS:
        raise DurationError(
            f"seconds must be between 0 and {MAX_SECONDS}", {"seconds": seconds}
        )
    if nanos < 0 or nanos >= NANOS_PER_SECOND:
        raise DurationError(
            f"nanos must be between 0 and {NANOS_PER_SECOND - 1}", {"nanos": nanos}
        )


def format_duration(seconds: int, nanos: int = 0) -> str:
    """Format a duration as a compact human-readable string.

    Args:
        seconds: Whole seconds, 0 <= seconds <= 2**64 - 1
        nanos: Sub-second nanoseconds, 0 <= nanos < 1_000_000_000

    Returns:
        Formatted duration string (e.g., "5h6m7.001s", "2.2ms", "0s")

    Raises:
        DurationError: If seconds or nanos is out of range
    """
    check_duration_range(seconds, nanos)

    if seconds == 0:
        if nanos == 0:
            return "0s"

        # Sub-second: pick the unit that keeps the leading digit non-zero
        if nanos < 1_000:
            unit, precision = "ns", 0
        elif nanos < 1_000_000:
            unit, precision = f"{MICRO_SIGN}s", 3
        else:
            unit, precision = "ms", 6

        fraction, whole = _format_fraction(nanos, precision)
        result = f"{_format_integer(whole)}{fraction}{unit}"
        logger.trace(  # type: ignore[attr-defined]
            f"Formatted sub-second duration nanos={nanos} as {result}"
        )
        return result

    fraction, _ = _format_fraction(nanos, 9)

    parts = [f"{_format_integer(seconds % 60)}{fraction}s"]
    minutes = seconds // 60
    if minutes > 0:
        parts.append(f"{_format_integer(minutes % 60)}m")
        # Stop at hours because days can be different lengths
        hours = minutes // 60
        if hours > 0:
            parts.append(f"{_format_integer(hours)}h")

    result = "".join(reversed(parts))
    logger.trace(  # type: ignore[attr-defined]
        f"Formatted duration seconds={seconds} nanos={nanos} as {result}"
    )
    return result


def format_timedelta(duration: timedelta) -> str:
    """Format a non-negative timedelta.

    timedelta only carries microsecond resolution, so the nanosecond part is
    always a multiple of 1000.

    Raises:
        DurationError: If the timedelta is negative
    """
    if duration < timedelta(0):
        raise DurationError(
            "Negative durations are not supported", {"duration": str(duration)}
        )

    seconds = duration.days * 86400 + duration.seconds
    return format_duration(seconds, duration.microseconds * 1_000)
