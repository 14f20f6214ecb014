"""Result types for explicit success/failure values.

Used where a step's outcome must be inspected before deciding the next
state (e.g. the authenticated retry state machine) instead of unwinding
through try/except at every level.

Usage:
    async def attempt() -> Result[int, Exception]:
        try:
            return Success(value=await operation())
        except Exception as e:
            return Failure(error=e)

    match await attempt():
        case Success(value=value):
            return value
        case Failure(error=error):
            raise error
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: What went wrong.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
