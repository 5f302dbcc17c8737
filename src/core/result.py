"""Result types for railway-oriented programming.

Cache adapters return Result values instead of raising, so the caller
decides how a failed operation is surfaced.

Usage:
    result = await cache.get("persistent_session:abc")
    match result:
        case Success(value=None):
            ...  # key not present
        case Success(value=payload):
            record = json.loads(payload)
        case Failure(error=error):
            raise TokenStoreError(str(error), error=error)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
