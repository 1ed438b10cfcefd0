"""
Result envelope for consistent success/failure handling.

Every broker and persistence operation on
:class:`~campfire.core.record.GenericRecord` returns ``Ok[T]`` or ``Err[T]``.
Absence is a *successful* outcome (``Ok(None)`` / ``Ok([])``); an ``Err``
always wraps a :class:`~campfire.core.errors.CampfireError` subclass that says
why the operation failed.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[T]      │     Utilities           │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: Exc    │ • try_result()          │
        │ • map()         │ • map_err()     │ • from_optional()       │
        │ • flat_map()    │ • or_else()     │ • collect_results()     │
        │ • unwrap()      │ • unwrap_or()   │                         │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    >>> result = Screen.broker_by_id(1)
    >>> match result:
    ...     case Ok(None):
    ...         print("no such screen")
    ...     case Ok(screen):
    ...         print(screen.get_key("strScreen"))
    ...     case Err(error):
    ...         print(error.category)

Guardrails:
    ❌ DON'T: Use unwrap() without checking is_ok() first
    ✅ DO: Use unwrap_or() or pattern matching for safe extraction

Tags:
    result-pattern, error-handling, campfire
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from campfire.core.errors import CampfireError


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Ok)."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        return self

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        return self

    def inspect_err(self, f: Callable[[Exception], None]) -> Result[T]:
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    ``map`` and ``flat_map`` pass the error through unchanged, so a chain of
    operations stops at the first failure.
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        return f(self.error)

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        """Call f with error to try recovery."""
        return f(self.error)

    def inspect_err(self, f: Callable[[Exception], None]) -> Result[T]:
        """Call f with error for side effects, return self."""
        f(self.error)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, CampfireError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


def try_result(f: Callable[[], T]) -> Result[T]:
    """
    Execute a function and wrap its outcome in a Result.

    >>> try_result(lambda: int("3")).unwrap()
    3
    >>> try_result(lambda: int("x")).is_err()
    True
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


def from_optional(value: T | None, error: Exception) -> Result[T]:
    """Ok(value) when value is not None, otherwise Err(error)."""
    if value is None:
        return Err(error)
    return Ok(value)


def collect_results(results: list[Result[T]]) -> Result[list[T]]:
    """All values if every result is Ok, otherwise the first Err."""
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return Err(result.error)
        values.append(result.value)
    return Ok(values)


__all__ = [
    "Ok",
    "Err",
    "Result",
    "try_result",
    "from_optional",
    "collect_results",
]
