"""Decoding of stored token records, including legacy layouts.

Records written by older releases are still accepted on read:

- Id-only records: the bare lookup clauses (``{"id": 42}``) with no wrapper
  and no metadata.
- Single-fingerprint metadata: ``{"session_fingerprint": "..."}`` instead of
  a ``session_metadata`` map.

Records are always written back in the current layout, so once every legacy
token has been redeemed or expired this module can be reduced to the
``CurrentRecord`` branch.
"""

from dataclasses import dataclass
from typing import Any

from src.persistent_session.errors import CorruptTokenRecordError
from src.persistent_session.models.metadata import PersistentMetadata
from src.persistent_session.models.record import (
    LOOKUP_CLAUSES_KEY,
    METADATA_KEY,
    TokenRecord,
)

LEGACY_FINGERPRINT_KEY = "session_fingerprint"


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentRecord:
    """Record in the current ``{"lookup_clauses", "metadata"}`` layout."""

    lookup_clauses: Any
    metadata: dict[str, Any]


@dataclass(frozen=True, slots=True, kw_only=True)
class LegacyIdOnlyRecord:
    """Record stored as bare lookup clauses."""

    lookup_clauses: dict[str, Any]


type StoredRecord = CurrentRecord | LegacyIdOnlyRecord


def decode_stored_record(payload: Any) -> StoredRecord:
    """Classify a decoded JSON payload.

    Lookup clauses are not validated here; that happens at redemption.

    Args:
        payload: Value parsed from the stored JSON.

    Returns:
        CurrentRecord or LegacyIdOnlyRecord.

    Raises:
        CorruptTokenRecordError: If the payload fits neither layout.
    """
    if not isinstance(payload, dict):
        raise CorruptTokenRecordError(
            f"Token record must be a JSON object, got {type(payload).__name__}"
        )

    if LOOKUP_CLAUSES_KEY not in payload:
        return LegacyIdOnlyRecord(lookup_clauses=payload)

    metadata = payload.get(METADATA_KEY) or {}
    if not isinstance(metadata, dict):
        raise CorruptTokenRecordError(
            f"Token record metadata must be a JSON object, got {type(metadata).__name__}"
        )
    return CurrentRecord(lookup_clauses=payload[LOOKUP_CLAUSES_KEY], metadata=metadata)


def upgrade_record(stored: StoredRecord) -> TokenRecord:
    """Convert any accepted layout into a TokenRecord.

    Args:
        stored: Result of decode_stored_record().

    Returns:
        TokenRecord in the current model.

    Raises:
        CorruptTokenRecordError: If the metadata cannot be decoded.
    """
    match stored:
        case LegacyIdOnlyRecord(lookup_clauses=clauses):
            return TokenRecord(lookup_clauses=clauses)
        case CurrentRecord(lookup_clauses=clauses, metadata=metadata):
            return TokenRecord(lookup_clauses=clauses, metadata=_upgrade_metadata(metadata))
        case _:
            raise CorruptTokenRecordError(f"Unknown token record layout: {stored!r}")


def _upgrade_metadata(metadata: dict[str, Any]) -> PersistentMetadata:
    raw = dict(metadata)
    legacy_fingerprint = raw.pop(LEGACY_FINGERPRINT_KEY, None)
    try:
        upgraded = PersistentMetadata.from_dict(raw)
    except (AttributeError, TypeError, ValueError) as e:
        raise CorruptTokenRecordError(f"Invalid token record metadata: {e}") from e

    if legacy_fingerprint is None:
        return upgraded
    return PersistentMetadata(
        session_metadata=upgraded.session_metadata,
        extra=upgraded.extra,
        legacy_fingerprint=legacy_fingerprint,
    )


def load_token_record(payload: Any) -> TokenRecord:
    """Decode and upgrade a stored payload in one step."""
    return upgrade_record(decode_stored_record(payload))
