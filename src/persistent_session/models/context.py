"""Request-scoped context the persistent session manager reads and writes.

The context is framework-neutral. The FastAPI middleware builds one per
request from the incoming cookies and copies ``resp_cookies`` onto the
outgoing response once the endpoint has run.
"""

from dataclasses import dataclass, field
from typing import Any

from src.persistent_session.models.metadata import PersistentMetadata, SessionMetadata


@dataclass(frozen=True, slots=True, kw_only=True)
class CookieSpec:
    """A cookie to write on the response.

    Attributes:
        value: Cookie value (token id, or empty on revocation).
        max_age: Lifetime in seconds; -1 expires the cookie immediately.
        path: Cookie path.
    """

    value: str
    max_age: int
    path: str = "/"

    @property
    def is_expired(self) -> bool:
        """True when this cookie clears the client copy."""
        return self.max_age < 0


@dataclass(kw_only=True)
class PersistentSessionContext:
    """Mutable per-request state.

    Attributes:
        req_cookies: Cookies sent by the client.
        resp_cookies: Cookies to set on the response, by name.
        session_metadata: Incoming primary session metadata.
        persistent_metadata: Metadata staged for the next issued token.
        assigns: Free-form values for the primary session integration
            (for example the authenticated user).
        request: Framework request object, when there is one.
    """

    req_cookies: dict[str, str] = field(default_factory=dict)
    resp_cookies: dict[str, CookieSpec] = field(default_factory=dict)
    session_metadata: SessionMetadata = field(default_factory=SessionMetadata)
    persistent_metadata: PersistentMetadata = field(default_factory=PersistentMetadata)
    assigns: dict[str, Any] = field(default_factory=dict)
    request: Any = None

    def put_resp_cookie(
        self, key: str, value: str, *, max_age: int, path: str = "/"
    ) -> None:
        """Stage a response cookie, replacing any earlier one with the same name."""
        self.resp_cookies[key] = CookieSpec(value=value, max_age=max_age, path=path)
