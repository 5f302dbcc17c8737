"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import CacheProtocol, LoggerProtocol
"""

from src.domain.protocols.cache_protocol import CacheProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol

__all__ = ["CacheProtocol", "LoggerProtocol"]
