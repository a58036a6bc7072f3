"""Data models for recorded traces."""

from .report import RunOutcome, StepReport, WaterfallReport
from .span_record import SpanRecord, SpanStatus
from .trace_graph import CURRENT_SCHEMA_VERSION, TraceGraph

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "RunOutcome",
    "SpanRecord",
    "SpanStatus",
    "StepReport",
    "TraceGraph",
    "WaterfallReport",
]
