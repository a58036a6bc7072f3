"""Example 2: A step fails and a traceable step opens its own span.

``validate`` receives the parent span as its first argument and records a
nested span for a schema lookup. ``store`` reports an error through its
continuation, so its span is tagged as an error, the sequence stops and the
terminal callback receives the error unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

import waterfalltracer
from waterfalltracer.core import LoggingSink
from waterfalltracer.core.tags import ERROR, SAMPLING_PRIORITY
from waterfalltracer.models import RunOutcome, WaterfallReport
from waterfalltracer.recording import RecordingSpan


def parse(raw: str, done: Any) -> None:
    done(None, raw.split(","))


def validate(parent: RecordingSpan, fields: list[str], done: Any) -> None:
    lookup = parent.child("schema_lookup")
    lookup.set_tag("field_count", len(fields))
    lookup.finish()
    done(None, fields)


def store(fields: list[str], done: Any) -> None:
    done(ConnectionError("database unavailable"))


def never_called(*args: Any) -> None:
    raise AssertionError("steps after a failure must not run")


def main() -> None:
    logging.basicConfig(level=logging.WARNING)
    tracer = waterfalltracer.configure(diagnostics=LoggingSink())

    stages = waterfalltracer.decorate_steps(
        lambda raw: {"operationName": "ingest"},
        [
            {"name": "parse", "handler": parse},
            {"name": "validate", "handler": validate, "is_traceable_step": True},
            {"name": "store", "handler": store},
            {"name": "notify", "handler": never_called},
        ],
    )

    results: list[tuple[Any, ...]] = []
    waterfalltracer.run_waterfall(stages, lambda *args: results.append(args), "a,b,c")

    # -- Assertions --
    [(err, *_)] = results
    assert isinstance(err, ConnectionError)

    [trace] = tracer.traces()
    assert trace.find("notify") is None
    failed = trace.find("store")
    assert failed is not None
    assert failed.tags == {ERROR: True, SAMPLING_PRIORITY: 1}
    assert all(span.end_time is not None for span in trace.spans.values())

    report = WaterfallReport.from_trace(trace)
    assert report.outcome == RunOutcome.FAILED
    assert report.failed_step == "store"
    print(f"{report.sequence}: {report.chain_text} (failed at {report.failed_step})")

    print("Example 2 PASSED: Failing step")


if __name__ == "__main__":
    main()
