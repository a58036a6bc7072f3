"""Waterfall-level view of a recorded trace."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from .span_record import SpanRecord, SpanStatus
from .trace_graph import TraceGraph


class RunOutcome(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    INCOMPLETE = "incomplete"


class StepReport(BaseModel):
    name: str
    status: SpanStatus
    duration_ms: float | None
    failed: bool


class WaterfallReport(BaseModel):
    """How a waterfall run went, read back from its spans.

    ``chain`` is the sequence span followed by one entry per step that ran,
    in the order they ran. When the resolver failed there is no sequence
    span and the chain starts at the first step. Spans opened inside a
    traceable step branch off the chain; ``is_chain`` is then false and
    ``chain`` lists every span in the order it was opened.
    """

    trace_id: str
    sequence: str
    schema_version: str
    duration_ms: float | None
    chain: list[StepReport]
    is_chain: bool
    failed_step: str | None
    open_spans: list[str]
    outcome: RunOutcome

    @classmethod
    def from_trace(cls, trace: TraceGraph) -> WaterfallReport:
        try:
            spans = trace.chain()
            is_chain = True
        except ValueError:
            spans = sorted(trace.spans.values(), key=lambda span: span.sequence_number)
            is_chain = False

        failed = trace.error_spans
        open_spans = trace.open_spans
        if open_spans:
            outcome = RunOutcome.INCOMPLETE
        elif failed:
            outcome = RunOutcome.FAILED
        else:
            outcome = RunOutcome.SUCCEEDED

        return cls(
            trace_id=trace.trace_id,
            sequence=trace.name,
            schema_version=trace.schema_version,
            duration_ms=trace.duration_ms,
            chain=[_step(span) for span in spans],
            is_chain=is_chain,
            failed_step=failed[0].name if failed else None,
            open_spans=[span.name for span in open_spans],
            outcome=outcome,
        )

    @property
    def chain_text(self) -> str:
        return " -> ".join(step.name for step in self.chain) or "<empty>"


def _step(span: SpanRecord) -> StepReport:
    return StepReport(
        name=span.name,
        status=span.status,
        duration_ms=span.duration_ms,
        failed=span.is_error,
    )
