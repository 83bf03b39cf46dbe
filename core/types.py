"""
Versify - Centralized Type Definitions

Provides type aliases and the Result type
shared by the versification packages.

Usage:
    from core.types import OsisRef, Result

    def parse(text: OsisRef) -> Result[VerseReference]:
        ...
"""
from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

# =============================================================================
# TYPE ALIASES - Simple type shortcuts
# =============================================================================

OsisRef = str  # Format: "Book.Chapter.Verse" (e.g., "Gen.3.16")
BookId = str  # OSIS book id (e.g., "Gen", "Ps", "1Cor")
VersificationName = str  # e.g., "KJV", "Synodal"

T = TypeVar("T")
R = TypeVar("R")


# =============================================================================
# RESULT TYPE - Explicit success/failure without exceptions
# =============================================================================


class Result(Generic[T]):
    """
    Explicit success/error result type.

    Usage:
        result = parse_reference(kjv, "Gen.3.16")
        if result.is_success:
            print(result.value)
        else:
            print(result.error)
    """

    def __init__(
        self,
        value: Optional[T] = None,
        error: Optional[str] = None,
        exception: Optional[Exception] = None,
    ):
        self._value = value
        self._error = error
        self._exception = exception

    @property
    def is_success(self) -> bool:
        return self._error is None and self._exception is None

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def value(self) -> T:
        if self.is_failure:
            raise ValueError(f"Cannot get value from failed result: {self._error}")
        return self._value  # type: ignore

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def exception(self) -> Optional[Exception]:
        return self._exception

    def unwrap(self) -> T:
        """Get value or raise exception."""
        if self._exception:
            raise self._exception
        if self._error:
            raise ValueError(self._error)
        return self._value  # type: ignore

    def map(self, fn: Callable[[T], R]) -> "Result[R]":
        """Transform value if successful."""
        if self.is_failure:
            return Result(error=self._error, exception=self._exception)
        return Result(value=fn(self._value))  # type: ignore

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        """Create successful result."""
        return cls(value=value)

    @classmethod
    def from_exception(cls, exception: Exception) -> "Result[T]":
        """Create failed result from exception."""
        return cls(error=str(exception), exception=exception)

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.success({self._value!r})"
        return f"Result(error={self._error!r})"
