"""Data models for durationfmt."""

from .duration import MAX, ZERO, Duration

__all__ = ["Duration", "MAX", "ZERO"]
