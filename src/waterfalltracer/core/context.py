"""Values threaded between waterfall stages."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TraceContext(BaseModel):
    """Sequence-level tracing state handed from one stage to the next.

    Instances are frozen. Each step builds the context for its successor
    with ``model_copy`` so ``parent_span`` advances along a single chain.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    sequence_name: str | None = None
    sequence_tags: dict[str, object] = Field(default_factory=dict)
    sequence_span: Any | None = None
    parent_span: Any | None = None

    def advance(self, span: Any) -> TraceContext:
        """Return the context the next stage sees once ``span`` has closed."""
        return self.model_copy(update={"parent_span": span})


class SequenceContext(BaseModel):
    """What a sequence resolver returns for the whole waterfall.

    Accepts both ``operation_name``/``parent_span`` and the camelCase
    ``operationName``/``parentSpan`` keys.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    operation_name: str = Field(alias="operationName")
    tags: Any | None = None
    parent_span: Any | None = Field(default=None, alias="parentSpan")
