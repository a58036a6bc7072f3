"""Public exception types for waterfalltracer."""

from __future__ import annotations


class WaterfallTracerError(Exception):
    """Base class for all waterfalltracer exceptions."""


class WaterfallTracerLoadError(WaterfallTracerError):
    """Raised when a trace file cannot be loaded or parsed."""


class WaterfallCallbackError(WaterfallTracerError):
    """Raised when a waterfall continuation is invoked more than once."""
