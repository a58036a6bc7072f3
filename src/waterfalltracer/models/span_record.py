"""Span record model and span status enumeration."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..core.tags import ERROR


class SpanStatus(StrEnum):
    OPEN = "open"
    FINISHED = "finished"


class SpanRecord(BaseModel):
    """Recorded state of one span."""

    model_config = ConfigDict(strict=True, extra="ignore")

    id: str = Field(default_factory=lambda: uuid4().hex)
    sequence_number: int
    name: str
    status: SpanStatus = SpanStatus.OPEN
    parent_id: str | None = None
    depth: int = 0
    start_time: datetime | None = None
    end_time: datetime | None = None
    tags: dict[str, object] = Field(default_factory=dict)

    @computed_field(return_type=float | None)
    @property
    def duration_ms(self) -> float | None:
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds() * 1000.0

    @property
    def is_error(self) -> bool:
        return bool(self.tags.get(ERROR))
