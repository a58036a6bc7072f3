from __future__ import annotations

from typing import Any

import pytest
from helpers import Terminal

from waterfalltracer.core import run_waterfall
from waterfalltracer.exceptions import WaterfallCallbackError


def test_empty_waterfall_calls_back_with_initial_arguments(terminal: Terminal) -> None:
    run_waterfall([], terminal, 1, 2)
    assert terminal.calls == [(None, 1, 2)]


def test_results_feed_the_next_task(terminal: Terminal) -> None:
    def split(text: str, done: Any) -> None:
        done(None, *text.split(","))

    def join(left: str, right: str, done: Any) -> None:
        done(None, f"{right}-{left}")

    run_waterfall([split, join], terminal, "a,b")
    assert terminal.calls == [(None, "b-a")]


def test_error_short_circuits_remaining_tasks(terminal: Terminal) -> None:
    error = ValueError("stop")
    reached: list[str] = []

    def fail(done: Any) -> None:
        done(error, "partial")

    def after(*args: Any) -> None:
        reached.append("after")

    run_waterfall([fail, after], terminal)
    assert terminal.calls == [(error, "partial")]
    assert reached == []


def test_continuation_called_twice_raises(terminal: Terminal) -> None:
    def twice(done: Any) -> None:
        done(None)
        done(None)

    with pytest.raises(WaterfallCallbackError, match="already called"):
        run_waterfall([twice], terminal)
    assert terminal.calls == [(None,)]


def test_deferred_continuation_resumes_the_chain(terminal: Terminal) -> None:
    pending: list[Any] = []

    def later(value: int, done: Any) -> None:
        pending.append(lambda: done(None, value + 1))

    run_waterfall([later, later], terminal, 0)
    assert terminal.calls == []

    pending.pop(0)()
    pending.pop(0)()
    assert terminal.calls == [(None, 2)]
