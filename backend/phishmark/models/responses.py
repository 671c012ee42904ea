"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    palettes: int = 0
    layouts_registered: int = 0


class GenerateResponse(BaseModel):
    identifier: str
    size: int
    image: str = Field(..., description="PNG as base64 or data URL")
    layout: str
    processing_time_ms: float = 0.0


class InspectResponse(BaseModel):
    identifier: str
    size: int
    noise_seed: int
    random_seed: int
    layout: str
    style: dict[str, Any] = Field(default_factory=dict)
    palette: list[str] = Field(default_factory=list)
    octaves: int = 0
    falloff: float = 0.0
    angle_step: float = 0.0
    field_shape: list[int] = Field(default_factory=list)


class PaletteEntry(BaseModel):
    index: int
    colors: list[str]


class PalettesResponse(BaseModel):
    version: int
    count: int
    palettes: list[PaletteEntry] = Field(default_factory=list)
