"""Inspect subcommand: report one recorded waterfall run."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Literal

from ..exceptions import WaterfallTracerLoadError
from ..models import RunOutcome, TraceGraph, WaterfallReport
from ..renderers import render_trace
from ..serializers import load_trace_json

VerbosityArg = Literal["minimal", "standard", "full"]

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_RUN_NOT_SUCCEEDED = 3


def run_inspect(
    trace_file: Path,
    verbosity: VerbosityArg,
    *,
    as_json: bool,
    output_path: Path | None,
    check: bool = False,
) -> int:
    """Print the run report for ``trace_file``.

    With ``check`` the exit code is ``EXIT_RUN_NOT_SUCCEEDED`` when a step
    failed or a span never closed, so the command can gate a CI job.
    """
    if output_path is not None and not as_json:
        raise ValueError("--output is only supported when --json is provided")

    trace = _load(trace_file)
    if trace is None:
        return EXIT_LOAD_ERROR
    report = WaterfallReport.from_trace(trace)

    if as_json:
        payload = json.dumps(report.model_dump(mode="json"), ensure_ascii=True, sort_keys=True)
        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(payload + "\n", encoding="utf-8")
        else:
            print(payload)
    else:
        _print_report(report)
        print()
        print(render_trace(trace, verbosity=verbosity))

    if check and report.outcome != RunOutcome.SUCCEEDED:
        return EXIT_RUN_NOT_SUCCEEDED
    return EXIT_OK


def _load(trace_file: Path) -> TraceGraph | None:
    try:
        return load_trace_json(trace_file)
    except FileNotFoundError:
        print(f"Error: file not found: {trace_file}", file=sys.stderr)
    except WaterfallTracerLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    except OSError as exc:
        print(f"Error reading file: {exc}", file=sys.stderr)
    return None


def _print_report(report: WaterfallReport) -> None:
    duration = f"{report.duration_ms:.0f}ms" if report.duration_ms is not None else "unknown"
    print(f"Trace ID: {report.trace_id}")
    print(f"Sequence: {report.sequence or '<unnamed>'}")
    print(f"Outcome: {report.outcome.value}")
    print(f"Chain: {report.chain_text}{'' if report.is_chain else ' (branched)'}")
    print(f"Failed step: {report.failed_step or 'none'}")
    if report.open_spans:
        print(f"Open spans: {', '.join(report.open_spans)}")
    print(f"Duration: {duration}")
    print(f"Schema: {report.schema_version}")
