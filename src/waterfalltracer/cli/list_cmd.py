"""List subcommand: one line per run stored in a trace directory."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from ..exceptions import WaterfallTracerLoadError
from ..models import RunOutcome, WaterfallReport
from ..renderers import render_runs
from ..storage import FileStore
from .inspect_cmd import EXIT_LOAD_ERROR, EXIT_OK


def run_list(directory: Path, *, as_json: bool, failed_only: bool = False) -> int:
    if not directory.is_dir():
        print(f"Error: not a trace directory: {directory}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    store = FileStore(directory)
    reports: list[WaterfallReport] = []
    for trace_id in store.list_traces():
        try:
            trace = store.load(trace_id)
        except WaterfallTracerLoadError as exc:
            print(f"Skipping {trace_id}: {exc}", file=sys.stderr)
            continue
        if trace is None:
            continue
        report = WaterfallReport.from_trace(trace)
        if failed_only and report.outcome == RunOutcome.SUCCEEDED:
            continue
        reports.append(report)

    if as_json:
        print(json.dumps([report.model_dump(mode="json") for report in reports], sort_keys=True))
    else:
        print(render_runs(reports))
    return EXIT_OK
