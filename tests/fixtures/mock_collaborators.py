"""Test doubles for the persistent session collaborators.

These implement UserResolver and PrimarySessionPlug structurally, with no
framework or database dependencies.
"""

from dataclasses import dataclass
from typing import Any

from src.persistent_session.models.config import PersistentSessionConfig
from src.persistent_session.models.context import PersistentSessionContext
from src.persistent_session.models.metadata import SessionMetadata

CURRENT_USER_KEY = "current_user"


@dataclass(frozen=True)
class FakeUser:
    """Minimal user with an ``id``."""

    id: int
    email: str = "user@example.com"


class InMemoryUserResolver:
    """UserResolver over a dict of users keyed by id."""

    def __init__(self, *users: FakeUser) -> None:
        self.users = {user.id: user for user in users}
        self.lookups: list[dict[str, Any]] = []

    async def get_by(self, clauses: dict[str, Any]) -> FakeUser | None:
        self.lookups.append(clauses)
        return self.users.get(clauses["id"])


class FakeSessionPlug:
    """PrimarySessionPlug keeping the current user in ``ctx.assigns``."""

    def __init__(self) -> None:
        self.established: list[tuple[FakeUser, SessionMetadata]] = []

    def current_user(self, ctx: PersistentSessionContext) -> Any | None:
        return ctx.assigns.get(CURRENT_USER_KEY)

    async def establish_session(
        self, ctx: PersistentSessionContext, user: Any
    ) -> None:
        ctx.assigns[CURRENT_USER_KEY] = user
        self.established.append((user, ctx.session_metadata))


def make_context(
    token_id: str | None = None,
    config: PersistentSessionConfig | None = None,
    **kwargs: Any,
) -> PersistentSessionContext:
    """Build a request context, optionally presenting a token cookie."""
    config = config or PersistentSessionConfig()
    req_cookies = {config.cookie_key: token_id} if token_id is not None else {}
    return PersistentSessionContext(req_cookies=req_cookies, **kwargs)


def next_request(
    previous: PersistentSessionContext,
    config: PersistentSessionConfig | None = None,
    **kwargs: Any,
) -> PersistentSessionContext:
    """Build the follow-up request a browser would send after ``previous``."""
    config = config or PersistentSessionConfig()
    return make_context(previous.resp_cookies[config.cookie_key].value, config, **kwargs)
