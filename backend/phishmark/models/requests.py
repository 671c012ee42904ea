"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    identifier: str = Field(..., description="UUID the image is derived from")
    size: int | None = Field(default=None, gt=0, description="Canvas edge in pixels (server default when omitted)")
    format: Literal["base64", "data_url"] = Field(
        default="base64",
        description="Encoding of the returned PNG",
    )


class InspectRequest(BaseModel):
    identifier: str = Field(..., description="UUID to inspect")
    size: int | None = Field(default=None, gt=0, description="Canvas edge in pixels")
