"""Core shared kernel.

Foundational utilities used across layers:
- Result types for railway-oriented programming
- Base error class for errors returned as data
- Settings

The core module has NO dependencies on other application layers.
"""

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
