"""RecordingTracer: an in-process tracer that keeps finished traces."""

from __future__ import annotations

import warnings
from datetime import UTC, datetime
from typing import Any

from ..models import TraceGraph
from ..storage import MemoryStore, StorageBackend
from .config import TracerConfig
from .hooks import RecorderHook
from .span import RecordingSpan


class RecordingTracer:
    """Owns its config, storage and hooks. Satisfies the core ``Tracer`` protocol.

    A span opened without a parent starts a new ``TraceGraph``; children join
    their parent's graph. Each time a graph has no open spans left it is
    saved to storage, so a graph saved early (for example when its root
    closes before a late child opens) is simply saved again.

    Error-handling contract
    ----------------------
    - Configuration errors (invalid ``TracerConfig``) and foreign parent
      spans raise immediately; the step decorator treats the latter as an
      instrumentation failure.
    - Runtime failures (``storage.save()``, hook errors) are swallowed with
      ``warnings.warn`` so the traced application is never affected.
    """

    def __init__(
        self,
        config: TracerConfig | None = None,
        storage: StorageBackend | None = None,
        hooks: list[RecorderHook] | None = None,
    ) -> None:
        self.config = config if config is not None else TracerConfig()
        self.storage: StorageBackend = storage if storage is not None else MemoryStore()
        self.hooks: list[RecorderHook] = list(hooks) if hooks is not None else []

    def start_span(self, name: str, *, child_of: Any | None = None) -> RecordingSpan:
        if child_of is not None and not isinstance(child_of, RecordingSpan):
            raise TypeError(
                f"RecordingTracer cannot open a span under {type(child_of).__name__}"
            )
        if child_of is None:
            trace = TraceGraph(name=name, start_time=datetime.now(UTC))
        else:
            trace = child_of.trace

        span = RecordingSpan(
            tracer=self,
            trace=trace,
            name=name,
            parent=child_of,
            config=self.config,
            on_finish=self._span_finished,
        )
        self._dispatch("on_span_started", span.record, trace.trace_id)
        return span

    def traces(self) -> list[TraceGraph]:
        """Return every stored trace."""
        loaded = (self.storage.load(trace_id) for trace_id in self.storage.list_traces())
        return [trace for trace in loaded if trace is not None]

    def _span_finished(self, span: RecordingSpan) -> None:
        trace = span.trace
        self._dispatch("on_span_finished", span.record, trace.trace_id)
        if trace.open_spans:
            return
        trace.end_time = datetime.now(UTC)
        try:
            self.storage.save(trace)
        except Exception:
            warnings.warn(
                f"waterfalltracer: failed to save trace {trace.trace_id}. "
                "Trace data has been dropped.",
                stacklevel=3,
            )
        self._dispatch("on_trace_flushed", trace)

    def _dispatch(self, event: str, *args: Any) -> None:
        for hook in self.hooks:
            handler = getattr(hook, event, None)
            if handler is None:
                continue
            try:
                handler(*args)
            except Exception:
                warnings.warn(f"waterfalltracer: hook error in {event}", stacklevel=3)
