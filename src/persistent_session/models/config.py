"""Persistent session configuration model.

PersistentSessionConfig is the explicit value object handed to the manager.
Build it from application settings with ``from_settings()`` or directly in
tests.
"""

import warnings
from dataclasses import dataclass
from typing import Literal

from src.core.config import DEFAULT_PERSISTENT_SESSION_TTL, Settings

DEFAULT_COOKIE_KEY = "persistent_session_cookie"

STORE_TYPES = ("cache",)
CACHE_STORE_BACKENDS = ("memory", "redis")

MAX_AGE_DEPRECATION_MESSAGE = (
    "persistent_session_cookie_max_age is deprecated, "
    "use persistent_session_ttl instead"
)


@dataclass(frozen=True, slots=True, kw_only=True)
class PersistentSessionConfig:
    """Persistent session configuration.

    Attributes:
        persistent_session_ttl: Token TTL in milliseconds. Drives both store
            expiry and cookie max-age.
        persistent_session_store: Token store selector ("cache").
        cache_store_backend: Cache backend for the cache store
            ("memory", "redis").
        persistent_session_cookie_key: Cookie name override.
        persistent_session_cookie_max_age: Deprecated cookie max-age in
            seconds. Still honoured when set.
        otp_app: Namespace prepended to the cookie name and token ids.

    Example:
        >>> config = PersistentSessionConfig(otp_app="my_app")
        >>> config.cookie_key
        'my_app_persistent_session_cookie'
        >>> config.max_age
        2592000
    """

    persistent_session_ttl: int = DEFAULT_PERSISTENT_SESSION_TTL
    persistent_session_store: Literal["cache"] = "cache"
    cache_store_backend: Literal["memory", "redis"] = "memory"
    persistent_session_cookie_key: str | None = None
    persistent_session_cookie_max_age: int | None = None
    otp_app: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.persistent_session_ttl <= 0:
            raise ValueError("persistent_session_ttl must be positive")
        if self.persistent_session_store not in STORE_TYPES:
            raise ValueError(
                f"Invalid persistent_session_store: {self.persistent_session_store}. "
                "Must be 'cache'"
            )
        if self.cache_store_backend not in CACHE_STORE_BACKENDS:
            raise ValueError(
                f"Invalid cache_store_backend: {self.cache_store_backend}. "
                "Must be 'memory' or 'redis'"
            )
        if self.persistent_session_cookie_max_age is not None:
            warnings.warn(MAX_AGE_DEPRECATION_MESSAGE, DeprecationWarning, stacklevel=3)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PersistentSessionConfig":
        """Build configuration from application settings.

        Args:
            settings: Application settings.

        Returns:
            PersistentSessionConfig instance.
        """
        return cls(
            persistent_session_ttl=settings.persistent_session_ttl,
            persistent_session_store=settings.persistent_session_store,
            cache_store_backend=settings.cache_store_backend,
            persistent_session_cookie_key=settings.persistent_session_cookie_key,
            persistent_session_cookie_max_age=settings.persistent_session_cookie_max_age,
            otp_app=settings.otp_app,
        )

    @property
    def ttl_ms(self) -> int:
        """Token TTL in milliseconds."""
        return self.persistent_session_ttl

    @property
    def uses_deprecated_max_age(self) -> bool:
        """True when the deprecated max-age option is set."""
        return self.persistent_session_cookie_max_age is not None

    @property
    def max_age(self) -> int:
        """Cookie max-age in seconds."""
        if self.persistent_session_cookie_max_age is not None:
            return self.persistent_session_cookie_max_age
        return self.persistent_session_ttl // 1000

    @property
    def cookie_key(self) -> str:
        """Cookie name.

        An explicit override is used as-is; the default name is namespaced
        when ``otp_app`` is set.
        """
        if self.persistent_session_cookie_key:
            return self.persistent_session_cookie_key
        return self.prepend_with_namespace(DEFAULT_COOKIE_KEY)

    def prepend_with_namespace(self, value: str) -> str:
        """Prefix ``value`` with ``"<otp_app>_"`` when a namespace is configured."""
        if self.otp_app:
            return f"{self.otp_app}_{value}"
        return value


DEFAULT_CONFIG = PersistentSessionConfig()
