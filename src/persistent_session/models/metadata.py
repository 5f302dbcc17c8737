"""Session and persistent-token metadata models.

SessionMetadata is the metadata of the primary session (device fingerprint,
first sighting). PersistentMetadata is what gets stored next to a token and
handed back when the token is redeemed.

Both keep unknown keys in ``extra`` so records written by newer code survive
a round trip through older code untouched.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

FINGERPRINT_KEY = "fingerprint"
FIRST_SEEN_AT_KEY = "first_seen_at"
SESSION_METADATA_KEY = "session_metadata"


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionMetadata:
    """Metadata of a primary session.

    Attributes:
        fingerprint: Device fingerprint the session was started from.
        first_seen_at: When the session family was first seen.
        extra: Unknown keys, passed through untouched.
    """

    fingerprint: str | None = None
    first_seen_at: datetime | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def merge(self, other: "SessionMetadata") -> "SessionMetadata":
        """Merge two bags; values set on ``other`` win.

        Args:
            other: Metadata whose non-empty values take precedence.

        Returns:
            New SessionMetadata.
        """
        return SessionMetadata(
            fingerprint=(
                other.fingerprint if other.fingerprint is not None else self.fingerprint
            ),
            first_seen_at=(
                other.first_seen_at
                if other.first_seen_at is not None
                else self.first_seen_at
            ),
            extra={**self.extra, **other.extra},
        )

    def without_fingerprint(self) -> "SessionMetadata":
        """Return a copy with the fingerprint removed."""
        return replace(self, fingerprint=None)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict, omitting unset fields."""
        data: dict[str, Any] = dict(self.extra)
        if self.fingerprint is not None:
            data[FINGERPRINT_KEY] = self.fingerprint
        if self.first_seen_at is not None:
            data[FIRST_SEEN_AT_KEY] = self.first_seen_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionMetadata":
        """Deserialize from a stored dict.

        Args:
            data: Mapping as produced by to_dict().

        Returns:
            SessionMetadata with unknown keys kept in ``extra``.
        """
        extra = dict(data)
        fingerprint = extra.pop(FINGERPRINT_KEY, None)
        first_seen_at = extra.pop(FIRST_SEEN_AT_KEY, None)
        if isinstance(first_seen_at, str):
            first_seen_at = datetime.fromisoformat(first_seen_at)
        return cls(fingerprint=fingerprint, first_seen_at=first_seen_at, extra=extra)


@dataclass(frozen=True, slots=True, kw_only=True)
class PersistentMetadata:
    """Metadata stored with a persistent session token.

    Attributes:
        session_metadata: Primary session metadata to restore on redemption.
        extra: Unknown keys, passed through untouched.
        legacy_fingerprint: Fingerprint read from records written in the
            old single-fingerprint format. Read-only, never written back.
    """

    session_metadata: SessionMetadata | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    legacy_fingerprint: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict, omitting unset fields."""
        data: dict[str, Any] = dict(self.extra)
        if self.session_metadata is not None:
            data[SESSION_METADATA_KEY] = self.session_metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersistentMetadata":
        """Deserialize from a stored dict in the current format.

        Args:
            data: Mapping as produced by to_dict().

        Returns:
            PersistentMetadata with unknown keys kept in ``extra``.
        """
        extra = dict(data)
        session_metadata = extra.pop(SESSION_METADATA_KEY, None)
        return cls(
            session_metadata=(
                SessionMetadata.from_dict(session_metadata)
                if session_metadata is not None
                else None
            ),
            extra=extra,
        )
