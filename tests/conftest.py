from __future__ import annotations

import pytest
from helpers import RecordingSink, Terminal

import waterfalltracer
from waterfalltracer.recording import RecordingTracer
from waterfalltracer.storage import MemoryStore


@pytest.fixture(autouse=True)
def _reset_config() -> None:
    waterfalltracer._reset_default_tracer()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def tracer(store: MemoryStore) -> RecordingTracer:
    return RecordingTracer(storage=store)


@pytest.fixture
def terminal() -> Terminal:
    return Terminal()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
