"""durationfmt - compact human-readable duration formatting."""

__version__ = "0.1.0"
