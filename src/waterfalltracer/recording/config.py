"""Configuration for a RecordingTracer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TracerConfig(BaseModel):
    """Validated configuration for a RecordingTracer. Passed via DI at construction."""

    max_tag_size: int | None = Field(default=None, ge=1)
    redact_tags: list[str] = []
