"""In-memory storage backend."""

from __future__ import annotations

from ..models import TraceGraph


class MemoryStore:
    """Keeps a snapshot of each flushed trace, in first-flush order.

    The tracer keeps mutating a graph after flushing it, so every ``save``
    stores a deep copy; ``load`` returns what was last flushed.
    """

    def __init__(self) -> None:
        self._traces: dict[str, TraceGraph] = {}

    def save(self, trace: TraceGraph) -> None:
        self._traces[trace.trace_id] = trace.model_copy(deep=True)

    def load(self, trace_id: str) -> TraceGraph | None:
        return self._traces.get(trace_id)

    def list_traces(self) -> list[str]:
        return list(self._traces)
