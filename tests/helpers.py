"""Stage and sink doubles shared by the test modules."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class Terminal:
    """Terminal callback that remembers every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def err(self) -> Any:
        return self.calls[0][0]

    @property
    def results(self) -> tuple[Any, ...]:
        return self.calls[0][1:]


class RecordingSink:
    """Diagnostic sink that keeps records instead of logging them."""

    def __init__(self) -> None:
        self.records: list[tuple[dict[str, object], str]] = []

    def warn(self, record: Mapping[str, object], message: str) -> None:
        self.records.append((dict(record), message))

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.records]


def passthrough(*args: Any) -> None:
    *values, done = args
    done(None, *values)
