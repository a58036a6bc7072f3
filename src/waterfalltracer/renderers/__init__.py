"""Trace renderers."""

from .console import Verbosity, render_runs, render_trace

__all__ = ["Verbosity", "render_runs", "render_trace"]
