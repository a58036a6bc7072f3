"""Continuation-chaining executor for waterfall stages."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from ..exceptions import WaterfallCallbackError


def run_waterfall(
    tasks: Sequence[Callable[..., None]],
    callback: Callable[..., None],
    *args: Any,
) -> None:
    """Run ``tasks`` one after another, error-first, like ``async.waterfall``.

    The first task receives ``*args`` plus a continuation. Each continuation
    is called as ``next(err, *results)``: a truthy ``err`` short-circuits to
    ``callback(err, *results)``, otherwise ``results`` become the positional
    arguments of the following task. After the last task ``callback`` gets
    ``(err, *results)`` from it.
    """
    stages = list(tasks)
    if not stages:
        callback(None, *args)
        return

    def run(index: int, stage_args: tuple[Any, ...]) -> None:
        called = False

        def next_stage(err: Any = None, *results: Any) -> None:
            nonlocal called
            if called:
                raise WaterfallCallbackError(
                    f"Continuation of waterfall task {index} was already called"
                )
            called = True
            if err or index == len(stages) - 1:
                callback(err, *results)
                return
            run(index + 1, results)

        stages[index](*stage_args, next_stage)

    run(0, tuple(args))
