"""Result type for expected failures in domain and storage operations.

Operations that can fail in an ordinary way (a parent task that does not
exist, a file that cannot be read) return ``Ok(value)`` or ``Err(error)``
instead of raising. Callers branch with ``isinstance``.

Example usage:
    >>> def parse_minutes(raw: str) -> Result[int, str]:
    ...     if not raw.isdigit():
    ...         return Err(f"Not a number: {raw}")
    ...     return Ok(int(raw))
    ...
    >>> result = parse_minutes("15")
    >>> if isinstance(result, Ok):
    ...     print(result.value)
    15
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007
