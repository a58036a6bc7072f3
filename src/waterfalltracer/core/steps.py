"""Waterfall step decoration.

``StepDecorator.decorate_steps`` turns a list of step definitions into the
stages a continuation-chaining executor runs in order::

    [start_stage, traced_step_1, ..., traced_step_n, finish_stage]

The start stage resolves the sequence context and opens the sequence span.
Every traced step opens a span as a child of the previous one, so the spans
form a single chain under the sequence span. The finish stage closes the
sequence span and strips the ``TraceContext`` before the terminal callback
sees the results.

Tracing is strictly additive. Failures while resolving the sequence,
opening, tagging or finishing spans are reported to the optional
diagnostic sink and never reach the handlers or the continuations.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from . import tags
from .context import SequenceContext, TraceContext
from .definitions import StepDefinition
from .diagnostics import DiagnosticSink, emit
from .outcome import attempt
from .protocols import Span, Tracer

Stage = Callable[..., None]
SequenceResolver = Callable[..., SequenceContext | Mapping[str, Any]]


class StepDecorator:
    """Builds traced waterfall stages against one tracer."""

    def __init__(self, tracer: Tracer, diagnostics: DiagnosticSink | None = None) -> None:
        self.tracer = tracer
        self.diagnostics = diagnostics

    def decorate_steps(
        self,
        get_sequence_context: SequenceResolver,
        definitions: Iterable[StepDefinition | Mapping[str, Any]],
    ) -> list[Stage]:
        """Return ``len(definitions) + 2`` stages ready for ``run_waterfall``."""
        steps = [self.decorate_step(definition) for definition in definitions]
        return [self.build_start_stage(get_sequence_context), *steps, self.finish_stage]

    def build_start_stage(self, get_sequence_context: SequenceResolver) -> Stage:
        def start_stage(*args: Any) -> None:
            *context_args, done = args
            opened = attempt(self._open_sequence, get_sequence_context, context_args)
            if opened.ok and opened.value is not None:
                trace_ctx = opened.value
            else:
                emit(
                    self.diagnostics,
                    "Failed resolving waterfall sequence context",
                    err=opened.error,
                )
                trace_ctx = TraceContext()
            done(None, trace_ctx, *context_args)

        return start_stage

    def decorate_step(self, definition: StepDefinition | Mapping[str, Any]) -> Stage:
        step = StepDefinition.coerce(definition)

        def traced_step(trace_ctx: TraceContext, *args: Any) -> None:
            *payload, callback = args
            handler_args = list(payload)
            if step.is_traceable_step:
                handler_args.insert(0, getattr(trace_ctx, "parent_span", None))

            instrumented = attempt(self._instrument, step, trace_ctx, handler_args, callback)
            if instrumented.ok and instrumented.value is not None:
                continuation = instrumented.value
            else:
                emit(
                    self.diagnostics,
                    "Error tracing step",
                    err=instrumented.error,
                    step=step.name,
                    sequence_name=getattr(trace_ctx, "sequence_name", None),
                )
                continuation = self._forward_context(trace_ctx, callback, step.name)

            step.handler(*handler_args, continuation)

        traced_step.__name__ = f"traced_{step.name}"
        traced_step.__qualname__ = traced_step.__name__
        return traced_step

    def finish_stage(self, trace_ctx: TraceContext, *args: Any) -> None:
        *results, done = args
        self._close_sequence(trace_ctx)
        done(None, *results)

    def _open_sequence(
        self,
        get_sequence_context: SequenceResolver,
        context_args: list[Any],
    ) -> TraceContext:
        resolved = SequenceContext.model_validate(get_sequence_context(*context_args))
        sequence_tags = dict(resolved.tags) if isinstance(resolved.tags, Mapping) else {}
        # Validated before the span opens so a rejected context leaves nothing open.
        trace_ctx = TraceContext(sequence_name=resolved.operation_name, sequence_tags=sequence_tags)

        span = self.tracer.start_span(resolved.operation_name, child_of=resolved.parent_span)
        try:
            if sequence_tags:
                span.add_tags(sequence_tags)
        except Exception:
            attempt(span.finish)
            raise
        return trace_ctx.model_copy(update={"sequence_span": span, "parent_span": span})

    def _instrument(
        self,
        step: StepDefinition,
        trace_ctx: TraceContext,
        handler_args: list[Any],
        callback: Callable[..., None],
    ) -> Callable[..., None]:
        """Open the step span and return the continuation that closes it."""
        sequence_name = trace_ctx.sequence_name
        span = self.tracer.start_span(step.name, child_of=trace_ctx.parent_span)
        span.add_tags(trace_ctx.sequence_tags)

        step_tags = attempt(step.get_tags, *handler_args)
        if not step_tags.ok:
            emit(
                self.diagnostics,
                f"Failed getting tags for {sequence_name}, step {step.name}",
                err=step_tags.error,
                step=step.name,
                sequence_name=sequence_name,
            )
        elif isinstance(step_tags.value, Mapping):
            span.add_tags(step_tags.value)

        next_ctx = trace_ctx.advance(span)

        def step_done(err: Any = None, *results: Any) -> None:
            closed = attempt(_close_step_span, span, err)
            if not closed.ok:
                emit(
                    self.diagnostics,
                    f"Failed finishing span for {sequence_name}, step {step.name}",
                    err=closed.error,
                    step=step.name,
                    sequence_name=sequence_name,
                )
            if err:
                # The executor skips the finish stage once a step fails.
                self._close_sequence(trace_ctx, step=step.name)
            callback(err, next_ctx, *results)

        return step_done

    def _forward_context(
        self,
        trace_ctx: Any,
        callback: Callable[..., None],
        step_name: str,
    ) -> Callable[..., None]:
        """Continuation for an uninstrumented step; keeps the stage shape intact."""

        def step_done(err: Any = None, *results: Any) -> None:
            if err:
                self._close_sequence(trace_ctx, step=step_name)
            callback(err, trace_ctx, *results)

        return step_done

    def _close_sequence(self, trace_ctx: Any, **fields: object) -> None:
        sequence_span = getattr(trace_ctx, "sequence_span", None)
        if sequence_span is None:
            return
        closed = attempt(sequence_span.finish)
        if not closed.ok:
            emit(
                self.diagnostics,
                "Error finishing waterfall tracing",
                err=closed.error,
                sequence_name=getattr(trace_ctx, "sequence_name", None),
                **fields,
            )


def _close_step_span(span: Span, err: Any) -> None:
    if err:
        span.set_tag(tags.ERROR, True)
        span.set_tag(tags.SAMPLING_PRIORITY, tags.FORCE_KEEP_PRIORITY)
    span.finish()
