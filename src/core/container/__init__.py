"""Container module - Centralized dependency injection.

Re-exports the application-scoped factories:

    from src.core.container import get_cache_backend, get_logger
"""

from src.core.container.infrastructure import get_cache_backend, get_logger

__all__ = ["get_cache_backend", "get_logger"]
