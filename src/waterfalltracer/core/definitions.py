"""Step definitions accepted by the step decorator."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def no_tags(*args: Any) -> dict[str, object]:
    return {}


class StepDefinition(BaseModel):
    """One step of a waterfall.

    ``handler`` is called with the step's arguments and a trailing
    continuation. ``get_tags`` receives the same arguments minus the
    continuation and returns extra tags for the step span. When
    ``is_traceable_step`` is set, the handler receives the current parent
    span as its first argument so it can open nested spans itself.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(min_length=1)
    handler: Callable[..., Any]
    get_tags: Callable[..., Any] = Field(default=no_tags, alias="getTags")
    is_traceable_step: bool = Field(default=False, alias="isTraceableStep")

    @classmethod
    def coerce(cls, definition: StepDefinition | Mapping[str, Any]) -> StepDefinition:
        if isinstance(definition, StepDefinition):
            return definition
        return cls.model_validate(definition)
