"""Spans recorded into an in-memory TraceGraph."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ..models import SpanRecord, SpanStatus, TraceGraph
from .config import TracerConfig

if TYPE_CHECKING:
    from .tracer import RecordingTracer

REDACTED = "[REDACTED]"


class RecordingSpan:
    """A span that is currently being recorded."""

    def __init__(
        self,
        *,
        tracer: RecordingTracer,
        trace: TraceGraph,
        name: str,
        parent: RecordingSpan | None = None,
        config: TracerConfig | None = None,
        on_finish: Callable[[RecordingSpan], None] | None = None,
    ) -> None:
        self.tracer = tracer
        self.trace = trace
        self.parent = parent
        self._config = config if config is not None else TracerConfig()
        self._on_finish = on_finish

        self.record = SpanRecord(
            sequence_number=trace.next_sequence_number(),
            name=name,
            parent_id=parent.record.id if parent is not None else None,
            depth=parent.record.depth + 1 if parent is not None else 0,
            start_time=datetime.now(UTC),
        )
        trace.add_span(self.record)

    def __repr__(self) -> str:
        return f"RecordingSpan(name={self.name!r}, status={self.record.status.value!r})"

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def finished(self) -> bool:
        return self.record.status == SpanStatus.FINISHED

    def add_tags(self, tags: Mapping[str, object]) -> None:
        """Merge tags into the span."""
        self.record.tags.update({key: self._tag_value(key, value) for key, value in tags.items()})

    def set_tag(self, key: str, value: object) -> None:
        self.record.tags[key] = self._tag_value(key, value)

    def child(self, name: str) -> RecordingSpan:
        """Open a span nested under this one."""
        return self.tracer.start_span(name, child_of=self)

    def finish(self) -> None:
        """Close the span. Closing an already finished span does nothing."""
        if self.finished:
            return
        self.record.status = SpanStatus.FINISHED
        self.record.end_time = datetime.now(UTC)
        if self._on_finish is not None:
            self._on_finish(self)

    def _tag_value(self, key: str, value: object) -> object:
        if key in self._config.redact_tags:
            return REDACTED
        return _truncate_if_needed(_safe_value(value), self._config.max_tag_size)


def _safe_value(value: object) -> object:
    """Ensure a tag value is JSON-serializable; fall back to its repr."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return f"{value!r} [NON-SERIALIZABLE]"


def _truncate_if_needed(value: object, limit: int | None) -> object:
    if limit is None or not isinstance(value, str) or len(value) <= limit:
        return value
    return f"{value[:limit]}... [TRUNCATED: original_size={len(value)}]"
