"""TraceGraph model: every span recorded under one root span."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, computed_field, model_validator

from .span_record import SpanRecord, SpanStatus

CURRENT_SCHEMA_VERSION = "0.1.0"


class TraceGraph(BaseModel):
    """Root trace structure holding span records keyed by id."""

    model_config = ConfigDict(strict=True, extra="ignore")

    schema_version: str = CURRENT_SCHEMA_VERSION
    trace_id: str = Field(default_factory=lambda: uuid4().hex)
    name: str = ""
    spans: dict[str, SpanRecord] = Field(default_factory=dict)
    start_time: datetime | None = None
    end_time: datetime | None = None

    _sequence_counter: int = PrivateAttr(default=0)

    @computed_field(return_type=float | None)
    @property
    def duration_ms(self) -> float | None:
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds() * 1000.0

    @property
    def root_spans(self) -> list[SpanRecord]:
        return self._ordered(span for span in self.spans.values() if span.parent_id is None)

    @property
    def open_spans(self) -> list[SpanRecord]:
        return self._ordered(
            span for span in self.spans.values() if span.status == SpanStatus.OPEN
        )

    @property
    def error_spans(self) -> list[SpanRecord]:
        return self._ordered(span for span in self.spans.values() if span.is_error)

    def children_of(self, span_id: str) -> list[SpanRecord]:
        return self._ordered(span for span in self.spans.values() if span.parent_id == span_id)

    def find(self, name: str) -> SpanRecord | None:
        """Return the first recorded span called ``name``."""
        matches = self._ordered(span for span in self.spans.values() if span.name == name)
        return matches[0] if matches else None

    def chain(self) -> list[SpanRecord]:
        """Walk the trace as a single parent chain, root first.

        Raises ``ValueError`` when the trace has several roots or a span
        with more than one child.
        """
        roots = self.root_spans
        if len(roots) != 1:
            raise ValueError(f"Trace {self.trace_id} has {len(roots)} root spans, expected 1")
        chain = [roots[0]]
        while True:
            children = self.children_of(chain[-1].id)
            if not children:
                return chain
            if len(children) > 1:
                raise ValueError(
                    f"Span {chain[-1].name!r} has {len(children)} children; trace is not a chain"
                )
            chain.append(children[0])

    def next_sequence_number(self) -> int:
        value = self._sequence_counter
        self._sequence_counter += 1
        return value

    def add_span(self, span: SpanRecord) -> None:
        if span.parent_id is not None and span.parent_id not in self.spans:
            raise ValueError(f"Unknown parent span id: {span.parent_id}")
        self.spans[span.id] = span

    @model_validator(mode="after")
    def validate_parent_references(self) -> TraceGraph:
        for span in self.spans.values():
            if span.parent_id is not None and span.parent_id not in self.spans:
                raise ValueError(f"Span parent_id not found in spans: {span.parent_id}")
        return self

    @staticmethod
    def _ordered(spans: Iterable[SpanRecord]) -> list[SpanRecord]:
        return sorted(spans, key=lambda span: span.sequence_number)
