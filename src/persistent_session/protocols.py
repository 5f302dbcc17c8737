"""Collaborator protocols the persistent session manager depends on.

The host application supplies both. Neither is inherited from; any object
with matching methods works (PEP 544 structural subtyping).
"""

from typing import Any, Protocol

from src.persistent_session.models.context import PersistentSessionContext


class UserResolver(Protocol):
    """Finds a user from the lookup clauses stored with a token."""

    async def get_by(self, clauses: dict[str, Any]) -> Any | None:
        """Return the user matching ``clauses`` (``{"id": ...}``), or None."""
        ...


class PrimarySessionPlug(Protocol):
    """The application's primary (short-lived) session mechanism."""

    def current_user(self, ctx: PersistentSessionContext) -> Any | None:
        """Return the user of the active primary session, or None."""
        ...

    async def establish_session(
        self, ctx: PersistentSessionContext, user: Any
    ) -> None:
        """Start a primary session for ``user``.

        Reads ``ctx.session_metadata`` for the metadata to attach.
        """
        ...
