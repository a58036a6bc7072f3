"""waterfalltracer: tracing spans for continuation-style waterfalls.

Convenience API (delegates to a default RecordingTracer):
    waterfalltracer.configure(...)       -> set up the default tracer
    waterfalltracer.decorate_steps(...)  -> traced stages for a waterfall
    waterfalltracer.run_waterfall(...)   -> run stages error-first, in order

DI API (bring your own tracer):
    from waterfalltracer.core import StepDecorator
    stages = StepDecorator(tracer, diagnostics=LoggingSink()).decorate_steps(
        resolve_sequence, definitions
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .core import (
    DiagnosticSink,
    LoggingSink,
    SequenceContext,
    SequenceResolver,
    Stage,
    StepDecorator,
    StepDefinition,
    TraceContext,
    Tracer,
    WarningsSink,
    run_waterfall,
)
from .recording import RecorderHook, RecordingTracer, TracerConfig
from .storage import FileStore, MemoryStore, StorageBackend

_default_tracer: RecordingTracer | None = None
_default_diagnostics: DiagnosticSink | None = None


def configure(
    *,
    storage: str | StorageBackend = "memory",
    max_tag_size: int | None = None,
    redact_tags: list[str] | None = None,
    hooks: list[RecorderHook] | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> RecordingTracer:
    """Configure and return the default RecordingTracer."""
    global _default_tracer, _default_diagnostics
    config = TracerConfig(max_tag_size=max_tag_size, redact_tags=list(redact_tags or []))
    _default_tracer = RecordingTracer(config=config, storage=_resolve_storage(storage), hooks=hooks)
    _default_diagnostics = diagnostics
    return _default_tracer


def get_tracer() -> RecordingTracer:
    """Return the default tracer, creating an in-memory one if needed."""
    global _default_tracer
    if _default_tracer is None:
        _default_tracer = RecordingTracer()
    return _default_tracer


def decorate_steps(
    get_sequence_context: SequenceResolver,
    definitions: Iterable[StepDefinition | Mapping[str, Any]],
    *,
    tracer: Tracer | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> list[Stage]:
    """Wrap ``definitions`` into traced stages: start, one per step, finish.

    ``tracer`` and ``diagnostics`` default to what ``configure`` set up.
    """
    decorator = StepDecorator(
        tracer if tracer is not None else get_tracer(),
        diagnostics=diagnostics if diagnostics is not None else _default_diagnostics,
    )
    return decorator.decorate_steps(get_sequence_context, definitions)


def _reset_default_tracer() -> None:
    """Reset the default tracer. Used by test fixtures."""
    global _default_tracer, _default_diagnostics
    _default_tracer = None
    _default_diagnostics = None


def _resolve_storage(storage: str | StorageBackend) -> StorageBackend:
    if not isinstance(storage, str):
        return storage
    if storage == "memory":
        return MemoryStore()
    if storage.startswith("file://"):
        return FileStore(storage.removeprefix("file://"))
    raise ValueError(
        "Unsupported storage value. Use 'memory', 'file://<path>', or a StorageBackend instance."
    )


__all__ = [
    "DiagnosticSink",
    "FileStore",
    "LoggingSink",
    "MemoryStore",
    "RecorderHook",
    "RecordingTracer",
    "SequenceContext",
    "StepDecorator",
    "StepDefinition",
    "StorageBackend",
    "TraceContext",
    "TracerConfig",
    "WarningsSink",
    "configure",
    "decorate_steps",
    "get_tracer",
    "run_waterfall",
]
