"""Persistent session manager - "remember me" token lifecycle.

Entry points:
- create(): issue a token for an authenticated user
- delete(): revoke the token presented with the request
- authenticate(): redeem a presented token when no primary session exists,
  rotate it, then renew the cookie

Decisions are made by the pure functions in ``pipeline``; this class only
applies the resulting intents against the store, the response cookies and
the primary session.
"""

from collections.abc import Callable
from typing import Any
from uuid import uuid4

from src.core.container import get_logger
from src.domain.protocols.logger_protocol import LoggerProtocol

from .errors import InvalidLookupClausesError, TokenIntegrityError
from .models.config import MAX_AGE_DEPRECATION_MESSAGE, PersistentSessionConfig
from .models.context import PersistentSessionContext
from .models.metadata import SessionMetadata
from .models.intents import (
    EstablishSession,
    Intent,
    IssueToken,
    RenewCookie,
    RevokeToken,
    in_application_order,
)
from .models.record import validate_lookup_clauses
from .pipeline import (
    carry_over_persistent_metadata,
    merge_session_metadata,
    plan_create,
    plan_delete,
    plan_establish_session,
    plan_renewal,
    presented_token,
)
from .protocols import PrimarySessionPlug, UserResolver
from .storage.base import PersistentSessionStore

REVOKED_COOKIE_VALUE = ""
REVOKED_COOKIE_MAX_AGE = -1


def _token_prefix(token_id: str) -> str:
    return token_id[:8]


class PersistentSessionManager:
    """Persistent session manager - orchestrator.

    Design Pattern:
        - Dependency Injection: store, user resolver and primary session
          plug are injected
        - Command pattern: planning functions return intents, applied here
          in a fixed order

    Example:
        ```python
        manager = PersistentSessionManager(
            config=PersistentSessionConfig(),
            store=CacheTokenStore(cache=MemoryCacheAdapter()),
            user_resolver=users,
            session_plug=sessions,
        )

        # On login with "remember me" checked
        await manager.create(ctx, user)

        # On every request
        await manager.authenticate(ctx)
        ```
    """

    def __init__(
        self,
        config: PersistentSessionConfig,
        store: PersistentSessionStore,
        user_resolver: UserResolver,
        session_plug: PrimarySessionPlug,
        logger: LoggerProtocol | None = None,
        token_id_factory: Callable[[], str] | None = None,
    ):
        """Initialize persistent session manager.

        Args:
            config: Persistent session configuration
            store: Token store
            user_resolver: Resolves users from stored lookup clauses
            session_plug: Primary session integration
            logger: Optional logger (defaults to the application logger)
            token_id_factory: Optional token id generator (defaults to UUID4)
        """
        self.config = config
        self.store = store
        self.user_resolver = user_resolver
        self.session_plug = session_plug
        self.logger = logger or get_logger()
        self._token_id_factory = token_id_factory or (lambda: str(uuid4()))

        if config.uses_deprecated_max_age:
            self.logger.warning(
                MAX_AGE_DEPRECATION_MESSAGE,
                persistent_session_cookie_max_age=config.persistent_session_cookie_max_age,
            )

    async def create(self, ctx: PersistentSessionContext, user: Any) -> str:
        """Issue a persistent session token for ``user``.

        Revokes any token presented with the request, stores a new record
        and sets the token cookie on the response.

        Args:
            ctx: Request context
            user: Authenticated user (must expose ``id``)

        Returns:
            The new token id

        Raises:
            TokenStoreError: If the store fails
        """
        return await self._issue(ctx, user, live=ctx.session_metadata)

    async def delete(self, ctx: PersistentSessionContext) -> None:
        """Revoke the token presented with the request, if any.

        Idempotent: without a token cookie this does nothing.

        Raises:
            TokenStoreError: If the store fails
        """
        await self._apply(ctx, plan_delete(ctx, self.config))

    async def authenticate(self, ctx: PersistentSessionContext) -> None:
        """Re-authenticate from a presented token, then renew the cookie.

        Redemption only runs when there is no primary session. A missing
        token or an unknown user leaves the request unauthenticated.

        Flow:
            1. Take the token record from the store (read and delete)
            2. Revoke the presented token
            3. Validate lookup clauses and resolve the user
            4. Restore metadata, issue a rotated token, establish session
            5. Renew the token cookie if nothing else was written

        Raises:
            TokenIntegrityError: If the stored record is corrupt
            TokenStoreError: If the store fails
        """
        if self.session_plug.current_user(ctx) is None:
            await self._redeem(ctx)

        await self._apply(ctx, plan_renewal(ctx, self.config))

    async def _redeem(self, ctx: PersistentSessionContext) -> None:
        token_id = presented_token(ctx, self.config)
        if token_id is None:
            return

        try:
            record = await self.store.take(token_id)
        except TokenIntegrityError as e:
            await self.delete(ctx)
            self.logger.critical(
                "Corrupt persistent session token record",
                error=e,
                token_prefix=_token_prefix(token_id),
            )
            raise

        await self.delete(ctx)

        if record is None:
            self.logger.info(
                "Persistent session token not found",
                reason="token_not_found",
                token_prefix=_token_prefix(token_id),
            )
            return

        try:
            clauses = validate_lookup_clauses(record.lookup_clauses)
        except InvalidLookupClausesError as e:
            self.logger.critical(
                "Invalid lookup clauses in persistent session token record",
                error=e,
                token_prefix=_token_prefix(token_id),
            )
            raise

        user = await self.user_resolver.get_by(clauses)
        if user is None:
            self.logger.info(
                "Persistent session user not found",
                reason="user_not_found",
                token_prefix=_token_prefix(token_id),
            )
            return

        # The rotated token is fingerprinted from the live session only.
        live = ctx.session_metadata
        ctx.persistent_metadata = carry_over_persistent_metadata(
            record.metadata, ctx.persistent_metadata
        )
        ctx.session_metadata = merge_session_metadata(record.metadata, live)

        new_token_id = await self._issue(ctx, user, live=live)
        await self._apply(ctx, plan_establish_session(user))

        self.logger.info(
            "Persistent session token redeemed",
            token_prefix=_token_prefix(token_id),
            rotated_token_prefix=_token_prefix(new_token_id),
            user_id=str(user.id),
        )

    async def _issue(
        self, ctx: PersistentSessionContext, user: Any, *, live: SessionMetadata
    ) -> str:
        token_id = self.config.prepend_with_namespace(self._token_id_factory())
        await self._apply(ctx, plan_create(ctx, user, self.config, token_id, live=live))
        return token_id

    async def _apply(
        self, ctx: PersistentSessionContext, intents: list[Intent]
    ) -> None:
        """Apply intents in order: revoke, issue, establish, renew."""
        for intent in in_application_order(intents):
            match intent:
                case RevokeToken(cookie_key=cookie_key, token_id=token_id):
                    await self.store.delete(token_id)
                    ctx.put_resp_cookie(
                        cookie_key,
                        REVOKED_COOKIE_VALUE,
                        max_age=REVOKED_COOKIE_MAX_AGE,
                    )
                    self.logger.info(
                        "Persistent session token revoked",
                        token_prefix=_token_prefix(token_id),
                    )
                case IssueToken(
                    cookie_key=cookie_key,
                    token_id=token_id,
                    record=record,
                    ttl_ms=ttl_ms,
                    max_age=max_age,
                ):
                    await self.store.put(token_id, record, ttl_ms)
                    ctx.put_resp_cookie(cookie_key, token_id, max_age=max_age)
                    self.logger.info(
                        "Persistent session token issued",
                        token_prefix=_token_prefix(token_id),
                        ttl_ms=ttl_ms,
                    )
                case EstablishSession(user=user):
                    await self.session_plug.establish_session(ctx, user)
                case RenewCookie(
                    cookie_key=cookie_key, token_id=token_id, max_age=max_age
                ):
                    ctx.put_resp_cookie(cookie_key, token_id, max_age=max_age)
                    self.logger.debug(
                        "Persistent session cookie renewed",
                        token_prefix=_token_prefix(token_id),
                    )
