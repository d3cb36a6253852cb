"""Configuration management using Pydantic Settings.

This module provides type-safe configuration with automatic environment
variable loading and validation.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- MatchingConfig: Track deduplication preferences
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("tempo.log")
    real_time_debug: bool = True


class MatchingConfig(BaseModel):
    """Track deduplication preferences."""

    # "Merge similar versions": treat Live/Remix/Acoustic cuts as the original
    merge_alternate_versions: bool = True
    # Minimum overall score for attaching a play to an existing track
    track_match_threshold: float = Field(default=0.85, ge=0.0, le=1.0)

    @property
    def strict_matching(self) -> bool:
        return not self.merge_alternate_versions


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Values can be set using flat naming or nested naming:
    - Flat (.env file or keyword arguments): CONSOLE_LOG_LEVEL, MERGE_ALTERNATE_VERSIONS
    - Nested (.env file or environment): LOGGING__CONSOLE_LEVEL,
      MATCHING__MERGE_ALTERNATE_VERSIONS

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    matching: MatchingConfig = MatchingConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat environment variables to nested structure.

        Maps legacy flat env vars (CONSOLE_LOG_LEVEL) onto the nested
        structure expected by the models (logging.console_level).
        """
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                transformed.setdefault("logging", {})[field_key] = data.pop(env_key)

        matching_mapping = {
            "merge_alternate_versions": "merge_alternate_versions",
            "track_match_threshold": "track_match_threshold",
        }
        for env_key, field_key in matching_mapping.items():
            if env_key in data:
                transformed.setdefault("matching", {})[field_key] = data.pop(env_key)

        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                values = {**existing, **values}
            data[section] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# BACKWARD COMPATIBILITY FUNCTIONS
# =============================================================================

_LEGACY_KEY_MAP = {
    # Logging settings
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    # Matching settings
    "MERGE_ALTERNATE_VERSIONS": lambda: settings.matching.merge_alternate_versions,
    "STRICT_MATCHING": lambda: settings.matching.strict_matching,
    "TRACK_MATCH_THRESHOLD": lambda: settings.matching.track_match_threshold,
}


def get_config(key: str, default=None):
    """Get configuration value by key with optional default.

    Maps flat keys to the nested Pydantic settings structure.

    Example:
        >>> get_config("TRACK_MATCH_THRESHOLD", 0.85)
        0.85
    """
    if key in _LEGACY_KEY_MAP:
        return _LEGACY_KEY_MAP[key]()

    return default
