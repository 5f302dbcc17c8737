"""Side-effect intents produced by the planning functions.

Planning functions in ``pipeline`` are pure: they look at the context and
return intents. The manager applies them, always in ``order``:

    RevokeToken -> IssueToken -> EstablishSession -> RenewCookie
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from src.persistent_session.models.record import TokenRecord


@dataclass(frozen=True, slots=True, kw_only=True)
class RevokeToken:
    """Delete a token from the store and expire its cookie."""

    order: ClassVar[int] = 0

    cookie_key: str
    token_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class IssueToken:
    """Store a new token record and set its cookie."""

    order: ClassVar[int] = 1

    cookie_key: str
    token_id: str
    record: TokenRecord
    ttl_ms: int
    max_age: int


@dataclass(frozen=True, slots=True, kw_only=True)
class EstablishSession:
    """Start a primary session for a re-authenticated user."""

    order: ClassVar[int] = 2

    user: Any


@dataclass(frozen=True, slots=True, kw_only=True)
class RenewCookie:
    """Rewrite the presented token cookie with a fresh max-age."""

    order: ClassVar[int] = 3

    cookie_key: str
    token_id: str
    max_age: int


type Intent = RevokeToken | IssueToken | EstablishSession | RenewCookie


def in_application_order(intents: list[Intent]) -> list[Intent]:
    """Sort intents into the order they must be applied in (stable)."""
    return sorted(intents, key=lambda intent: intent.order)
