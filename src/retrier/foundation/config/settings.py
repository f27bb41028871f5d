"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from retrier.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.poll_interval
    0.01
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # RETRIER_RETRY_POLL_INTERVAL=0.05
    # RETRIER_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIER_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class RetrySettings(BaseSettings):
    """Retry loop tuning."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIER_RETRY_",
        extra="ignore",
    )

    poll_interval: PositiveFloat = Field(
        default=0.01,
        description="Seconds between is_open() checks when waiting on a breaker without wait()",
    )
    log_attempts: bool = Field(default=True, description="Log every failed attempt at DEBUG")


class RetrierSettings(BaseSettings):
    """Root settings for retrier.

    Loads configuration from environment variables with RETRIER_ prefix.

    Example environment variables:
        RETRIER_LOG_LEVEL=DEBUG
        RETRIER_LOG_FORMAT=json
        RETRIER_RETRY_POLL_INTERVAL=0.05
    """

    model_config = SettingsConfigDict(
        env_prefix="RETRIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> RetrierSettings:
    """Get the global settings instance (cached)."""
    return RetrierSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
