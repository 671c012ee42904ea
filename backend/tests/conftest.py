"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import replace

import pytest

from phishmark.engine.context import build_state
from phishmark.engine.layouts.drawing import DrawContext
from phishmark.engine.surface import RecordingSurface


# Worked example: noise seed from "123e4567e89b1", random seed from "6426614174000"
SAMPLE_UUID = "123e4567-e89b-12d3-a456-426614174000"

SAMPLE_UUIDS = [
    SAMPLE_UUID,
    "f47ac10b-58cc-4372-a567-0e02b2c3d479",
    "9b2e4c1a-7d3f-4e8a-b6c5-2f1d0e9a8b7c",
    "00000000-0000-4000-8000-000000000001",
    "c56a4180-65aa-42ec-a945-5fd21dec0538",
    "6fa459ea-ee8a-3ca4-894e-db77e160355e",
]

# Small canvases keep the pure-Python tracing fast.
SMALL_SIZE = 120


@pytest.fixture
def sample_uuid() -> str:
    return SAMPLE_UUID


@pytest.fixture
def sample_uuids() -> list[str]:
    return list(SAMPLE_UUIDS)


@pytest.fixture
def small_size() -> int:
    return SMALL_SIZE


@pytest.fixture
def make_state():
    """Build (state, stream) with optional style overrides applied after selection."""

    def _make(identifier: str = SAMPLE_UUID, size: int = SMALL_SIZE, **style):
        state, stream = build_state(identifier, size)
        if style:
            state = replace(state, style=replace(state.style, **style))
        return state, stream

    return _make


@pytest.fixture
def make_ctx(make_state):
    """DrawContext over a RecordingSurface, for driving layouts directly."""

    def _make(identifier: str = SAMPLE_UUID, size: int = SMALL_SIZE, **style) -> DrawContext:
        state, stream = make_state(identifier, size, **style)
        return DrawContext.create(state, stream, RecordingSurface(size, size))

    return _make
