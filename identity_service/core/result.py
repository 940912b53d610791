"""Result types for railway-oriented programming.

Operations that can fail in expected ways (bad password, expired code,
duplicate email) return a Result instead of raising. Callers branch with
structural pattern matching:

    result = await lifecycle.login(command)
    match result:
        case Success(value=outcome):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

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
        error: The error describing the failure.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
