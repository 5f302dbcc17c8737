"""Persistent Session Package.

"Remember me" sessions: a long-lived, single-use token kept in a cookie
silently re-authenticates a user once their primary session has ended.
Every redemption rotates the token.

Key Features:
    - Single-use tokens with atomic redemption
    - Session metadata carried across rotations (fingerprint excluded)
    - Cache-agnostic token store (Redis, in-process memory)
    - Accepts token records written in legacy layouts
    - Framework adapter (FastAPI)

Usage:
    ```python
    from src.persistent_session.factory import get_persistent_session_manager
    from src.persistent_session.models.config import PersistentSessionConfig

    manager = get_persistent_session_manager(
        PersistentSessionConfig(),
        user_resolver=users,
        session_plug=sessions,
    )
    ```
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
