"""Configuration settings for durationfmt.

Settings come from three places, highest priority first: ``DURATIONFMT_*``
environment variables, an optional JSON config file, and field defaults.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import DurationFmtError

ENV_PREFIX = "DURATIONFMT_"

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"]

# Above these the rotating log file is probably misconfigured
LARGE_LOG_FILE_BYTES = 100 * 1024 * 1024
MANY_LOG_BACKUPS = 20


class ConfigurationError(DurationFmtError):
    """Exception raised for configuration validation errors."""

    pass


@dataclass
class ValidationResult:
    """Problems found while checking a Settings object."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def get_summary(self) -> str:
        """Short human-readable count of errors and warnings."""
        counts = []
        if self.errors:
            counts.append(f"{len(self.errors)} error(s)")
        if self.warnings:
            counts.append(f"{len(self.warnings)} warning(s)")
        return ", ".join(counts) or "validation passed"

    def raise_if_invalid(self) -> None:
        """Raise ConfigurationError listing every error, if there are any."""
        if self.errors:
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(self.errors),
                {"errors": self.errors, "warnings": self.warnings},
            )


class Settings(BaseSettings):
    """Logging and console options for the durationfmt CLI."""

    log_level: str = Field(default="WARNING")
    log_file: Optional[Path] = Field(default=None)
    log_file_max_size: int = Field(default=10 * 1024 * 1024, gt=0)
    log_file_backup_count: int = Field(default=5, ge=0)
    json_logs: bool = Field(default=True)

    verbose: bool = Field(default=False)
    quiet: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        env_ignore_empty=True,
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level and reject unknown names."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_file")
    @classmethod
    def absolutize_log_file(cls, v: Union[str, Path, None]) -> Optional[Path]:
        """Expand ~ and resolve relative paths against the working directory."""
        if v is None:
            return None
        path = Path(v).expanduser()
        return path if path.is_absolute() else Path.cwd() / path

    @model_validator(mode="after")
    def check_consistency(self) -> "Settings":
        if self.quiet and self.verbose:
            raise ValueError("Cannot use both --quiet and --verbose flags")
        self.check().raise_if_invalid()
        return self

    def check(self) -> ValidationResult:
        """Collect errors and warnings about the logging setup without raising."""
        result = ValidationResult()

        if self.log_file is not None and self.log_file.is_dir():
            result.errors.append(f"Log file path is a directory: {self.log_file}")

        if self.log_file_max_size > LARGE_LOG_FILE_BYTES:
            size_mb = self.log_file_max_size / (1024 * 1024)
            result.warnings.append(f"Log file max size is quite large: {size_mb:.1f}MB")

        if self.log_file_backup_count > MANY_LOG_BACKUPS:
            result.warnings.append(
                f"Log file backup count is quite high: {self.log_file_backup_count}"
            )

        return result

    def get_effective_log_level(self) -> str:
        """Log level after applying --quiet (ERROR) or --verbose (DEBUG)."""
        if self.quiet:
            return "ERROR"
        if self.verbose:
            return "DEBUG"
        return self.log_level

    def save(self, config_file: Path) -> None:
        """Write these settings as a JSON config file."""
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(
            json.dumps(self.model_dump(mode="json"), indent=2) + "\n",
            encoding="utf-8",
        )

    @classmethod
    def from_file(cls, config_file: Optional[Path] = None) -> "Settings":
        """Build settings from a JSON file, letting the environment win.

        A missing file means defaults. An unreadable or malformed file is
        logged as a warning and also falls back to defaults.
        """
        file_values: Dict[str, Any] = {}

        if config_file is not None and config_file.exists():
            try:
                loaded = json.loads(config_file.read_text(encoding="utf-8"))
                if not isinstance(loaded, dict):
                    raise TypeError("top-level JSON value must be an object")
                file_values = loaded
            except (OSError, ValueError, TypeError) as e:
                # ValueError covers JSONDecodeError and UnicodeDecodeError
                logging.warning(f"Failed to load config from {config_file}: {e}")

        # Init kwargs outrank the environment in pydantic-settings
        overrides = {
            key: value
            for key, value in file_values.items()
            if f"{ENV_PREFIX}{key.upper()}" not in os.environ
        }
        return cls(**overrides)


def get_default_config_file() -> Path:
    """Config file location under $XDG_CONFIG_HOME, or ~/.config."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "durationfmt" / "config.json"


def validate_settings(settings: Settings, strict: bool = False) -> ValidationResult:
    """Check settings; in strict mode every warning becomes an error."""
    result = settings.check()
    if strict:
        result.errors.extend(f"Strict mode: {w}" for w in result.warnings)
        result.warnings = []
    return result


def load_settings(config_file: Optional[Path] = None, strict: bool = False) -> Settings:
    """Load settings from the config file and environment.

    Args:
        config_file: JSON config path; the default location when None
        strict: Treat configuration warnings as errors

    Returns:
        The loaded Settings

    Raises:
        ConfigurationError: If the configuration has errors
    """
    settings = Settings.from_file(config_file or get_default_config_file())

    result = validate_settings(settings, strict=strict)
    for warning in result.warnings:
        logging.warning(f"Configuration warning: {warning}")
    result.raise_if_invalid()

    return settings
