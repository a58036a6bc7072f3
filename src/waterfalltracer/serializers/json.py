"""JSON serialization for recorded waterfall traces."""

from __future__ import annotations

import os
import warnings
from pathlib import Path

from ..exceptions import WaterfallTracerLoadError
from ..models import CURRENT_SCHEMA_VERSION, TraceGraph


def trace_to_json(trace: TraceGraph, *, indent: int | None = 2) -> str:
    return trace.model_dump_json(indent=indent)


def trace_from_json(payload: str | bytes, *, source: str | None = None) -> TraceGraph:
    """Parse a JSON document into a TraceGraph.

    Raises ``WaterfallTracerLoadError`` when the payload is not valid JSON or
    does not describe a trace; ``source`` names the document in the message.
    Warns when the schema version differs from the one this package writes.
    """
    where = f" in {source}" if source else ""
    try:
        graph = TraceGraph.model_validate_json(payload)
    except ValueError as exc:
        raise WaterfallTracerLoadError(f"Failed to parse trace JSON{where}: {exc}") from exc
    if graph.schema_version != CURRENT_SCHEMA_VERSION:
        warnings.warn(
            f"Trace schema version {graph.schema_version!r}{where} differs from "
            f"current {CURRENT_SCHEMA_VERSION!r}. "
            "Some fields may be missing or ignored.",
            stacklevel=2,
        )
    return graph


def save_trace_json(trace: TraceGraph, path: str | Path, *, indent: int | None = 2) -> Path:
    """Write ``trace`` to ``path`` through a sibling temp file and an atomic rename.

    A trace is rewritten every time it is flushed, so the target is replaced
    whole instead of being truncated and refilled.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    staging = output_path.with_name(f".{output_path.name}.tmp")
    staging.write_text(trace_to_json(trace, indent=indent), encoding="utf-8")
    os.replace(staging, output_path)
    return output_path


def load_trace_json(path: str | Path) -> TraceGraph:
    """Load a trace from a JSON file.

    ``FileNotFoundError`` and other ``OSError`` subclasses propagate as is.
    """
    source = Path(path)
    return trace_from_json(source.read_text(encoding="utf-8"), source=str(source))
