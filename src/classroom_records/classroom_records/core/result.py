"""Typed operation results.

Core operations return ``Ok``/``Err`` instead of raising, so batch callers can
collect per-item outcomes. ``unwrap()`` turns an ``Err`` back into the raised
domain exception for callers that prefer try/except.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .exceptions import DomainError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T = None  # type: ignore[assignment]

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: DomainError

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]


@dataclass(frozen=True)
class ItemOutcome:
    """Per-item outcome of a bulk operation."""

    key: str
    result: Any

    @property
    def ok(self) -> bool:
        return bool(self.result.ok)


def capture(fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Result[T]":
    """Run ``fn`` and convert a raised DomainError into ``Err``."""
    try:
        return Ok(fn(*args, **kwargs))
    except DomainError as exc:
        return Err(exc)
