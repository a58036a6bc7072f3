"""Event hook protocol for observing a recording tracer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..models import SpanRecord, TraceGraph


@runtime_checkable
class RecorderHook(Protocol):
    """Receives span lifecycle events from a ``RecordingTracer``.

    Implement any subset of these methods; missing ones are skipped.
    Hook methods must not raise; exceptions are reported with
    ``warnings.warn`` and otherwise ignored.
    """

    def on_span_started(self, span: SpanRecord, trace_id: str) -> None: ...
    def on_span_finished(self, span: SpanRecord, trace_id: str) -> None: ...
    def on_trace_flushed(self, trace: TraceGraph) -> None: ...


class NullHook:
    """No-op hook."""

    def on_span_started(self, span: SpanRecord, trace_id: str) -> None:
        pass

    def on_span_finished(self, span: SpanRecord, trace_id: str) -> None:
        pass

    def on_trace_flushed(self, trace: TraceGraph) -> None:
        pass
