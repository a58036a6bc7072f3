"""Storage backend abstractions."""

from __future__ import annotations

from typing import Protocol

from ..models import TraceGraph


class StorageBackend(Protocol):
    """Where a recording tracer flushes a waterfall trace.

    A trace is flushed each time it has no open spans. A sequence span that
    closes before a late child opens is flushed again afterwards, so
    ``save`` must replace whatever was stored under the same ``trace_id``.
    """

    def save(self, trace: TraceGraph) -> None: ...
    def load(self, trace_id: str) -> TraceGraph | None: ...
    def list_traces(self) -> list[str]: ...
