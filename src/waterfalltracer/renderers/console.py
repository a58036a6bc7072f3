"""Rich-based trace console rendering."""

from __future__ import annotations

import json
from collections.abc import Iterable
from io import StringIO
from typing import Literal

from rich import box
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from ..core.tags import SAMPLING_PRIORITY
from ..models import SpanRecord, SpanStatus, TraceGraph, WaterfallReport

Verbosity = Literal["minimal", "standard", "full"]
_MAX_VALUE_LEN = 200


def render_trace(trace: TraceGraph, *, verbosity: Verbosity = "standard") -> str:
    tree = Tree(_trace_label(trace))
    for root in trace.root_spans:
        _add_span_branch(tree, root, trace, verbosity)

    console = Console(record=True, width=120, markup=False, file=StringIO())
    console.print(tree)
    return console.export_text()


def _trace_label(trace: TraceGraph) -> str:
    duration = f"{trace.duration_ms:.0f}ms" if trace.duration_ms is not None else "ongoing"
    name = trace.name or trace.trace_id
    return f"Trace: {name} ({duration})"


def _add_span_branch(
    parent_tree: Tree,
    span: SpanRecord,
    trace: TraceGraph,
    verbosity: Verbosity,
) -> None:
    duration = f"{span.duration_ms:.0f}ms" if span.duration_ms is not None else "open"
    branch = parent_tree.add(f"{span.name} ({duration}) {_status_icon(span)}")

    if verbosity != "minimal" and span.is_error:
        priority = span.tags.get(SAMPLING_PRIORITY)
        suffix = f" (sampling priority {priority})" if priority is not None else ""
        branch.add(f"error{suffix}")

    if verbosity == "full" and span.tags:
        branch.add(f"tags: {_format_data(span.tags)}")

    for child in trace.children_of(span.id):
        _add_span_branch(branch, child, trace, verbosity)


def _format_data(data: dict[str, object]) -> str:
    """Format dict for display, truncating large values."""
    try:
        s = json.dumps(data, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        s = str(data)
    if len(s) <= _MAX_VALUE_LEN:
        return s
    return s[:_MAX_VALUE_LEN] + "... [truncated]"


def _status_icon(span: SpanRecord) -> str:
    if span.status == SpanStatus.OPEN:
        return "…"
    if span.is_error:
        return "✗"
    return "✓"


def render_runs(reports: Iterable[WaterfallReport]) -> str:
    """One table row per recorded waterfall run."""
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("Trace ID", no_wrap=True)
    table.add_column("Sequence")
    table.add_column("Outcome")
    table.add_column("Steps", justify="right")
    table.add_column("Failed step")
    table.add_column("Duration", justify="right")

    for report in reports:
        duration = f"{report.duration_ms:.0f}ms" if report.duration_ms is not None else "-"
        table.add_row(
            report.trace_id,
            report.sequence or "<unnamed>",
            report.outcome.value,
            str(len(report.chain)),
            report.failed_step or "-",
            duration,
        )

    console = Console(record=True, width=140, markup=False, file=StringIO())
    console.print(table)
    return console.export_text()
