"""Isolated execution of instrumentation calls."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, NamedTuple, TypeVar

T = TypeVar("T")


class Outcome(NamedTuple, Generic[T]):
    """Result of an isolated call: either ``value`` or ``error`` is meaningful."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def attempt(func: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
    """Call ``func`` and capture a raised ``Exception`` as a failed outcome.

    Only ``Exception`` subclasses are captured; ``KeyboardInterrupt`` and
    friends still propagate.
    """
    try:
        return Outcome(value=func(*args, **kwargs))
    except Exception as exc:
        return Outcome(error=exc)
