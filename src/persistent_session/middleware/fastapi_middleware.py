"""FastAPI middleware adapter for persistent sessions.

Builds a PersistentSessionContext per request, runs authenticate() before
the endpoint, and writes the staged cookies onto the response afterwards.
Endpoints reach the context and manager through dependencies to call
create() on login and delete() on logout.

This is a FRAMEWORK ADAPTER - specific to FastAPI/Starlette.

Usage:
    from fastapi import Depends, FastAPI
    from src.core.fingerprinting import generate_device_fingerprint
    from src.persistent_session.middleware.fastapi_middleware import (
        PersistentSessionMiddleware,
        get_persistent_session_context,
        get_persistent_session_manager_dep,
    )

    app = FastAPI()
    app.add_middleware(
        PersistentSessionMiddleware,
        manager=manager,
        fingerprint_provider=generate_device_fingerprint,
    )

    @app.post("/login")
    async def login(
        ctx: PersistentSessionContext = Depends(get_persistent_session_context),
        manager: PersistentSessionManager = Depends(get_persistent_session_manager_dep),
    ):
        user = ...
        await manager.create(ctx, user)
"""

from collections.abc import Callable
from dataclasses import replace

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from src.persistent_session.models.context import PersistentSessionContext
from src.persistent_session.models.metadata import PersistentMetadata, SessionMetadata
from src.persistent_session.service import PersistentSessionManager

CONTEXT_STATE_KEY = "persistent_session"
MANAGER_STATE_KEY = "persistent_session_manager"
SESSION_METADATA_STATE_KEY = "session_metadata"
PERSISTENT_METADATA_STATE_KEY = "persistent_session_metadata"


def build_context(
    request: Request,
    fingerprint_provider: Callable[[Request], str] | None = None,
) -> PersistentSessionContext:
    """Build the persistent session context for a request.

    Metadata bags set upstream on ``request.state`` are picked up. When the
    session metadata has no fingerprint and a provider is given, the
    provider's fingerprint is used.

    Args:
        request: FastAPI Request object
        fingerprint_provider: Optional callable deriving a device fingerprint

    Returns:
        PersistentSessionContext for this request
    """
    session_metadata = (
        getattr(request.state, SESSION_METADATA_STATE_KEY, None) or SessionMetadata()
    )
    persistent_metadata = (
        getattr(request.state, PERSISTENT_METADATA_STATE_KEY, None)
        or PersistentMetadata()
    )

    if session_metadata.fingerprint is None and fingerprint_provider is not None:
        session_metadata = replace(
            session_metadata, fingerprint=fingerprint_provider(request)
        )

    return PersistentSessionContext(
        req_cookies=dict(request.cookies),
        session_metadata=session_metadata,
        persistent_metadata=persistent_metadata,
        request=request,
    )


class PersistentSessionMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware that runs persistent session authentication.

    Attributes:
        manager: PersistentSessionManager shared by all requests
        fingerprint_provider: Optional device fingerprint callable
        cookie_secure: Set the Secure flag on token cookies

    Note:
        Integrity faults raised by authenticate() are not caught here; they
        surface as server errors.
    """

    def __init__(
        self,
        app,
        manager: PersistentSessionManager,
        fingerprint_provider: Callable[[Request], str] | None = None,
        cookie_secure: bool = False,
    ):
        """Initialize middleware.

        Args:
            app: FastAPI application instance
            manager: Configured PersistentSessionManager
            fingerprint_provider: Optional callable deriving a device
                fingerprint from the request
            cookie_secure: Set the Secure flag on token cookies
        """
        super().__init__(app)
        self.manager = manager
        self.fingerprint_provider = fingerprint_provider
        self.cookie_secure = cookie_secure

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Authenticate, run the endpoint, then write staged cookies.

        Args:
            request: FastAPI Request object
            call_next: Next middleware/endpoint in chain

        Returns:
            Response from downstream middleware/endpoint, with cookies set
        """
        ctx = build_context(request, self.fingerprint_provider)
        setattr(request.state, CONTEXT_STATE_KEY, ctx)
        setattr(request.state, MANAGER_STATE_KEY, self.manager)

        await self.manager.authenticate(ctx)

        response = await call_next(request)
        self.write_cookies(ctx, response)
        return response

    def write_cookies(self, ctx: PersistentSessionContext, response: Response) -> None:
        """Copy staged cookies onto the response."""
        for key, cookie in ctx.resp_cookies.items():
            response.set_cookie(
                key,
                cookie.value,
                max_age=cookie.max_age,
                path=cookie.path,
                secure=self.cookie_secure,
                httponly=True,
                samesite="lax",
            )


# Dependency functions for endpoint injection


def get_persistent_session_context(request: Request) -> PersistentSessionContext:
    """Dependency returning the request's PersistentSessionContext.

    Raises:
        RuntimeError: If PersistentSessionMiddleware is not configured
    """
    ctx = getattr(request.state, CONTEXT_STATE_KEY, None)

    if ctx is None:
        raise RuntimeError(
            "Persistent session context not found in request state. "
            "Did you forget to add PersistentSessionMiddleware?"
        )

    return ctx


def get_persistent_session_manager_dep(request: Request) -> PersistentSessionManager:
    """Dependency returning the PersistentSessionManager.

    Raises:
        RuntimeError: If PersistentSessionMiddleware is not configured
    """
    manager = getattr(request.state, MANAGER_STATE_KEY, None)

    if manager is None:
        raise RuntimeError(
            "PersistentSessionManager not found in request state. "
            "Did you forget to add PersistentSessionMiddleware?"
        )

    return manager
