"""Adapter exposing an OpenTelemetry tracer through the core ``Tracer`` protocol.

Requires the ``otel`` extra (``opentelemetry-api``)::

    from opentelemetry import trace
    from waterfalltracer.integrations.opentelemetry import OpenTelemetryTracer

    stages = waterfalltracer.decorate_steps(
        resolve, steps, tracer=OpenTelemetryTracer(trace.get_tracer(__name__))
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from opentelemetry import trace as otel_trace
from opentelemetry.trace import Status, StatusCode
from opentelemetry.util.types import AttributeValue

from ..core.tags import ERROR


class OpenTelemetrySpan:
    """Wraps an OpenTelemetry span; tags become span attributes."""

    def __init__(self, otel_span: otel_trace.Span) -> None:
        self.otel_span = otel_span

    def add_tags(self, tags: Mapping[str, object]) -> None:
        for key, value in tags.items():
            self.set_tag(key, value)

    def set_tag(self, key: str, value: object) -> None:
        self.otel_span.set_attribute(key, _attribute_value(value))
        if key == ERROR and value:
            self.otel_span.set_status(Status(StatusCode.ERROR))

    def finish(self) -> None:
        self.otel_span.end()


class OpenTelemetryTracer:
    """Opens OpenTelemetry spans with an explicit parent instead of the ambient one."""

    def __init__(
        self,
        otel_tracer: otel_trace.Tracer | None = None,
        *,
        instrumenting_module: str = "waterfalltracer",
    ) -> None:
        self.otel_tracer = otel_tracer or otel_trace.get_tracer(instrumenting_module)

    def start_span(self, name: str, *, child_of: Any | None = None) -> OpenTelemetrySpan:
        context = None
        parent = _unwrap(child_of)
        if parent is not None:
            context = otel_trace.set_span_in_context(parent)
        return OpenTelemetrySpan(self.otel_tracer.start_span(name, context=context))


def _unwrap(child_of: Any | None) -> otel_trace.Span | None:
    if child_of is None:
        return None
    if isinstance(child_of, OpenTelemetrySpan):
        return child_of.otel_span
    if isinstance(child_of, otel_trace.Span):
        return child_of
    raise TypeError(f"OpenTelemetryTracer cannot open a span under {type(child_of).__name__}")


def _attribute_value(value: object) -> AttributeValue:
    if isinstance(value, (str, bool, int, float)):
        return value
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)) and value and all(isinstance(v, str) for v in value):
        return [str(v) for v in value]
    return str(value)
