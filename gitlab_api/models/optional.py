"""
Result types for optional lookups.

A get-or-absent call returns ``Found(value)`` or ``Absent(error)``. Only a
404 from the server is treated as absent; any other failure is raised.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

from ..errors import UnexpectedStatusError

T = TypeVar("T")

NOT_FOUND = 404


@dataclass(frozen=True)
class Found(Generic[T]):
    """A lookup that returned a value."""

    value: T

    @property
    def is_present(self) -> bool:
        return True

    def or_else(self, default: Optional[T] = None) -> Optional[T]:
        return self.value


@dataclass(frozen=True)
class Absent:
    """A lookup whose target does not exist (HTTP 404)."""

    error: Optional[UnexpectedStatusError] = None

    @property
    def is_present(self) -> bool:
        return False

    def or_else(self, default: Optional[T] = None) -> Optional[T]:
        return default


OptionalResult = Union[Found[T], Absent]


def fetch_optional(fetch: Callable[[], T]) -> "OptionalResult[T]":
    """Run ``fetch`` and map a 404 to ``Absent``.

    Transport, decode and non-404 status failures propagate unchanged.
    """
    try:
        return Found(fetch())
    except UnexpectedStatusError as error:
        if error.actual == NOT_FOUND:
            return Absent(error)
        raise
