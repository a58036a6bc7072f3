from __future__ import annotations

from datetime import UTC, datetime

import pytest

from waterfalltracer.core.tags import ERROR
from waterfalltracer.models import SpanRecord, SpanStatus, TraceGraph


def _linked(*names: str) -> TraceGraph:
    trace = TraceGraph(name=names[0])
    parent_id = None
    for depth, name in enumerate(names):
        span = SpanRecord(
            sequence_number=trace.next_sequence_number(),
            name=name,
            parent_id=parent_id,
            depth=depth,
        )
        trace.add_span(span)
        parent_id = span.id
    return trace


def test_span_duration_ms_is_computed() -> None:
    span = SpanRecord(
        sequence_number=0,
        name="step",
        start_time=datetime(2026, 1, 1, tzinfo=UTC),
        end_time=datetime(2026, 1, 1, second=1, tzinfo=UTC),
    )
    assert span.duration_ms == 1000.0
    assert SpanRecord(sequence_number=1, name="open").duration_ms is None


def test_is_error_reads_error_tag() -> None:
    assert SpanRecord(sequence_number=0, name="x", tags={ERROR: True}).is_error
    assert not SpanRecord(sequence_number=0, name="x", tags={ERROR: False}).is_error
    assert not SpanRecord(sequence_number=0, name="x").is_error


def test_trace_sequence_counter_is_monotonic() -> None:
    trace = TraceGraph(name="run")
    assert [trace.next_sequence_number() for _ in range(3)] == [0, 1, 2]


def test_chain_walks_single_child_links() -> None:
    trace = _linked("Seq", "A", "B")
    assert [span.name for span in trace.chain()] == ["Seq", "A", "B"]


def test_chain_rejects_branching_trace() -> None:
    trace = _linked("Seq", "A")
    root = trace.root_spans[0]
    trace.add_span(SpanRecord(sequence_number=trace.next_sequence_number(), name="B", parent_id=root.id))

    with pytest.raises(ValueError, match="not a chain"):
        trace.chain()
    assert [span.name for span in trace.children_of(root.id)] == ["A", "B"]


def test_chain_rejects_multiple_roots() -> None:
    trace = TraceGraph(name="run")
    trace.add_span(SpanRecord(sequence_number=0, name="one"))
    trace.add_span(SpanRecord(sequence_number=1, name="two"))

    with pytest.raises(ValueError, match="2 root spans"):
        trace.chain()


def test_add_span_requires_known_parent() -> None:
    trace = TraceGraph(name="run")
    with pytest.raises(ValueError, match="Unknown parent span id"):
        trace.add_span(SpanRecord(sequence_number=0, name="orphan", parent_id="missing"))


def test_model_validation_rejects_missing_parent() -> None:
    orphan = SpanRecord(sequence_number=0, name="orphan", parent_id="missing")
    with pytest.raises(ValueError, match="Span parent_id not found"):
        TraceGraph(name="run", spans={orphan.id: orphan})


def test_open_error_and_find_helpers() -> None:
    trace = _linked("Seq", "A")
    a = trace.find("A")
    assert a is not None
    a.status = SpanStatus.FINISHED
    a.tags[ERROR] = True

    assert [span.name for span in trace.open_spans] == ["Seq"]
    assert [span.name for span in trace.error_spans] == ["A"]
    assert trace.find("missing") is None
