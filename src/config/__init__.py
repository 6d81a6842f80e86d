"""Configuration management for durationfmt."""

from .settings import (
    ConfigurationError,
    Settings,
    ValidationResult,
    get_default_config_file,
    load_settings,
    validate_settings,
)

__all__ = [
    "ConfigurationError",
    "Settings",
    "ValidationResult",
    "get_default_config_file",
    "load_settings",
    "validate_settings",
]
