"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables. Every field carries a default so the persistent session manager can
run in development and tests without any environment set up.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic

Usage:
    from src.core.config import settings

    # Access config
    ttl_ms = settings.persistent_session_ttl

    # Environment detection
    if settings.is_development:
        # Dev-specific behavior
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment

# 30 days in milliseconds.
DEFAULT_PERSISTENT_SESSION_TTL = 30 * 24 * 60 * 60 * 1000


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Loads configuration from environment variables (case-insensitive).

    Configuration precedence:
        1. Environment variables
        2. Default values

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Redis
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL used by the 'redis' cache backend",
    )

    # Persistent session ("remember me")
    otp_app: str | None = Field(
        default=None,
        description="Application namespace prepended to cookie key and token ids",
    )
    persistent_session_store: Literal["cache"] = Field(
        default="cache",
        description="Token store implementation",
    )
    cache_store_backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="Cache backend used by the token store (memory, redis)",
    )
    persistent_session_cookie_key: str | None = Field(
        default=None,
        description="Cookie name override (default: persistent_session_cookie)",
    )
    persistent_session_ttl: int = Field(
        default=DEFAULT_PERSISTENT_SESSION_TTL,
        description="Token TTL in milliseconds (store expiry and cookie max-age)",
    )
    persistent_session_cookie_max_age: int | None = Field(
        default=None,
        description="Deprecated: cookie max-age in seconds, use persistent_session_ttl",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name.

        Args:
            v: Log level name from environment.

        Returns:
            Upper-cased log level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log_level: {v}")
        return level

    @field_validator("persistent_session_ttl")
    @classmethod
    def validate_persistent_session_ttl(cls, v: int) -> int:
        """Ensure the persistent session TTL is positive."""
        if v <= 0:
            raise ValueError("persistent_session_ttl must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing or CI environment."""
        return self.environment in {Environment.TESTING, Environment.CI}

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are loaded only once per process.
    Call get_settings.cache_clear() in tests after patching the environment.

    Returns:
        Settings: Application configuration.
    """
    return Settings()


settings = get_settings()
