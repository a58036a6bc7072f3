"""Core waterfall tracing runtime."""

from . import tags
from .context import SequenceContext, TraceContext
from .definitions import StepDefinition
from .diagnostics import DiagnosticSink, LoggingSink, WarningsSink
from .outcome import Outcome, attempt
from .protocols import Span, Tracer
from .steps import SequenceResolver, Stage, StepDecorator
from .waterfall import run_waterfall

__all__ = [
    "DiagnosticSink",
    "LoggingSink",
    "Outcome",
    "SequenceContext",
    "SequenceResolver",
    "Span",
    "Stage",
    "StepDecorator",
    "StepDefinition",
    "TraceContext",
    "Tracer",
    "WarningsSink",
    "attempt",
    "run_waterfall",
    "tags",
]
