"""Pure planning functions for persistent session side effects.

Nothing here touches the store, the response or the primary session. Each
function reads the context (and configuration) and returns intents or new
metadata values; PersistentSessionManager applies the result.
"""

from dataclasses import replace
from typing import Any

from src.persistent_session.models.config import PersistentSessionConfig
from src.persistent_session.models.context import PersistentSessionContext
from src.persistent_session.models.intents import (
    EstablishSession,
    Intent,
    IssueToken,
    RenewCookie,
    RevokeToken,
)
from src.persistent_session.models.metadata import PersistentMetadata, SessionMetadata
from src.persistent_session.models.record import TokenRecord


def presented_token(
    ctx: PersistentSessionContext, config: PersistentSessionConfig
) -> str | None:
    """Token id from the request cookie, or None when absent or empty."""
    return ctx.req_cookies.get(config.cookie_key) or None


def plan_delete(
    ctx: PersistentSessionContext, config: PersistentSessionConfig
) -> list[Intent]:
    """Plan revocation of the token presented with the request.

    Returns:
        A single RevokeToken, or nothing when no token cookie was sent.
    """
    token_id = presented_token(ctx, config)
    if token_id is None:
        return []
    return [RevokeToken(cookie_key=config.cookie_key, token_id=token_id)]


def put_fingerprint(
    staged: PersistentMetadata, live: SessionMetadata
) -> PersistentMetadata:
    """Copy the live session fingerprint into staged token metadata.

    An explicitly staged fingerprint is never overwritten.

    Args:
        staged: Metadata staged for the next issued token.
        live: Metadata of the current session.

    Returns:
        Staged metadata, with the fingerprint filled in when possible.
    """
    if live.fingerprint is None:
        return staged

    session_metadata = staged.session_metadata or SessionMetadata()
    if session_metadata.fingerprint is not None:
        return staged

    return replace(
        staged,
        session_metadata=replace(session_metadata, fingerprint=live.fingerprint),
    )


def plan_create(
    ctx: PersistentSessionContext,
    user: Any,
    config: PersistentSessionConfig,
    token_id: str,
    *,
    live: SessionMetadata | None = None,
) -> list[Intent]:
    """Plan issuing a token for ``user``.

    Any token presented with the request is revoked first, so the new
    cookie is the one left on the response.

    Args:
        ctx: Request context.
        user: Authenticated user; only ``user.id`` is stored.
        config: Persistent session configuration.
        token_id: Fresh token id (already namespaced).
        live: Session metadata to take the fingerprint from. Defaults to
            ``ctx.session_metadata``.

    Returns:
        Intents: optional RevokeToken followed by IssueToken.
    """
    live = ctx.session_metadata if live is None else live
    record = TokenRecord(
        lookup_clauses={"id": user.id},
        metadata=put_fingerprint(ctx.persistent_metadata, live),
    )
    issue = IssueToken(
        cookie_key=config.cookie_key,
        token_id=token_id,
        record=record,
        ttl_ms=config.ttl_ms,
        max_age=config.max_age,
    )
    return [*plan_delete(ctx, config), issue]


def plan_establish_session(user: Any) -> list[Intent]:
    """Plan starting a primary session for a re-authenticated user."""
    return [EstablishSession(user=user)]


def plan_renewal(
    ctx: PersistentSessionContext, config: PersistentSessionConfig
) -> list[Intent]:
    """Plan refreshing the presented token cookie.

    Nothing is planned when the response already carries a token cookie
    (issued or revoked during this request) or no token was presented.
    """
    if config.cookie_key in ctx.resp_cookies:
        return []

    token_id = presented_token(ctx, config)
    if token_id is None:
        return []
    return [
        RenewCookie(
            cookie_key=config.cookie_key, token_id=token_id, max_age=config.max_age
        )
    ]


def carry_over_persistent_metadata(
    metadata: PersistentMetadata, staged: PersistentMetadata
) -> PersistentMetadata:
    """Stage a redeemed token's session metadata for the rotated token.

    Values the caller already staged win. The fingerprint is always
    stripped; the rotated token gets the current request's fingerprint.

    Args:
        metadata: Metadata of the redeemed token.
        staged: Metadata currently staged on the context.

    Returns:
        New staged metadata, or ``staged`` unchanged when the redeemed token
        carried no session metadata.
    """
    if metadata.session_metadata is None:
        return staged

    merged = metadata.session_metadata.merge(
        staged.session_metadata or SessionMetadata()
    )
    return replace(staged, session_metadata=merged.without_fingerprint())


def merge_session_metadata(
    metadata: PersistentMetadata, live: SessionMetadata
) -> SessionMetadata:
    """Restore a redeemed token's session metadata into the live bag.

    Values already present in ``live`` win. For legacy records carrying a
    single fingerprint, it is used only when ``live`` has none.

    Args:
        metadata: Metadata of the redeemed token.
        live: Incoming session metadata.

    Returns:
        Merged session metadata.
    """
    if metadata.session_metadata is not None:
        return metadata.session_metadata.merge(live)

    if metadata.legacy_fingerprint is not None and live.fingerprint is None:
        return replace(live, fingerprint=metadata.legacy_fingerprint)

    return live
