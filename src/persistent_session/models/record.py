"""Token record stored server-side for each persistent session token."""

from dataclasses import dataclass, field
from typing import Any

from src.persistent_session.errors import InvalidLookupClausesError
from src.persistent_session.models.metadata import PersistentMetadata

LOOKUP_CLAUSES_KEY = "lookup_clauses"
METADATA_KEY = "metadata"


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenRecord:
    """What a token id maps to in the store.

    Attributes:
        lookup_clauses: How to find the user again; exactly ``{"id": <user id>}``.
        metadata: Metadata restored when the token is redeemed.
    """

    lookup_clauses: dict[str, Any]
    metadata: PersistentMetadata = field(default_factory=PersistentMetadata)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored wire format."""
        return {
            LOOKUP_CLAUSES_KEY: dict(self.lookup_clauses),
            METADATA_KEY: self.metadata.to_dict(),
        }


def validate_lookup_clauses(clauses: Any) -> dict[str, Any]:
    """Check that lookup clauses are exactly ``{"id": <user id>}``.

    Args:
        clauses: Clauses read from a redeemed token record.

    Returns:
        The clauses, unchanged.

    Raises:
        InvalidLookupClausesError: If any other key is present or ``id`` is missing.
    """
    if isinstance(clauses, dict) and list(clauses) == ["id"]:
        return clauses
    raise InvalidLookupClausesError(clauses)
