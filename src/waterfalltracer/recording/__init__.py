"""In-process recording tracer."""

from .config import TracerConfig
from .hooks import NullHook, RecorderHook
from .span import RecordingSpan
from .tracer import RecordingTracer

__all__ = ["NullHook", "RecorderHook", "RecordingSpan", "RecordingTracer", "TracerConfig"]
