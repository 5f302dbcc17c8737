"""Unit tests for configuration management (flat Settings).

Tests cover:
- Settings loading from environment variables
- Environment detection
- Validation (log level, TTL)
- Default values
- Cached singleton behavior
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import Settings, get_settings
from src.core.enums import Environment


class TestEnvironmentEnum:
    """Test Environment enum."""

    def test_environment_values(self):
        """Test that all expected environments are defined."""
        assert Environment.DEVELOPMENT == "development"
        assert Environment.TESTING == "testing"
        assert Environment.CI == "ci"
        assert Environment.PRODUCTION == "production"


class TestSettingsDefaults:
    """Test Settings default values."""

    def test_defaults_without_environment(self):
        """Test every field has a usable default."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.log_level == "INFO"
        assert settings.otp_app is None
        assert settings.persistent_session_store == "cache"
        assert settings.cache_store_backend == "memory"
        assert settings.persistent_session_cookie_key is None
        assert settings.persistent_session_ttl == 2_592_000_000
        assert settings.persistent_session_cookie_max_age is None
        assert settings.is_development


class TestSettingsFromEnvironment:
    """Test Settings loaded from environment variables."""

    def test_environment_variables_are_loaded(self):
        """Test values are read case-insensitively from the environment."""
        env = {
            "ENVIRONMENT": "testing",
            "LOG_LEVEL": "debug",
            "OTP_APP": "my_app",
            "CACHE_STORE_BACKEND": "redis",
            "PERSISTENT_SESSION_TTL": "60000",
            "persistent_session_cookie_max_age": "30",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.is_testing
        assert settings.log_level == "DEBUG"
        assert settings.otp_app == "my_app"
        assert settings.cache_store_backend == "redis"
        assert settings.persistent_session_ttl == 60000
        assert settings.persistent_session_cookie_max_age == 30

    def test_invalid_log_level(self):
        """Test an unknown log level is rejected."""
        with patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}, clear=True):
            with pytest.raises(ValidationError):
                Settings()

    def test_invalid_ttl(self):
        """Test a non-positive TTL is rejected."""
        with patch.dict(os.environ, {"PERSISTENT_SESSION_TTL": "0"}, clear=True):
            with pytest.raises(ValidationError):
                Settings()

    def test_invalid_backend(self):
        """Test an unknown cache backend is rejected."""
        with patch.dict(os.environ, {"CACHE_STORE_BACKEND": "disk"}, clear=True):
            with pytest.raises(ValidationError):
                Settings()


class TestGetSettings:
    """Test cached settings accessor."""

    def test_get_settings_is_cached(self):
        """Test get_settings returns the same instance until cleared."""
        get_settings.cache_clear()
        first = get_settings()

        assert get_settings() is first

        get_settings.cache_clear()
        assert get_settings() is not first
