"""Tracer capabilities consumed by the step decorator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Span(Protocol):
    """A traced time interval that can carry tags."""

    def add_tags(self, tags: Mapping[str, object]) -> None: ...
    def set_tag(self, key: str, value: object) -> None: ...
    def finish(self) -> None: ...


@runtime_checkable
class Tracer(Protocol):
    """Anything that can open a span, optionally as the child of another."""

    def start_span(self, name: str, *, child_of: Any | None = None) -> Span: ...
