"""Image endpoints — POST /api/generate, GET /api/generate/{identifier}.png|.svg."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from phishmark.config import Settings
from phishmark.dependencies import get_settings
from phishmark.engine.pipeline import generate as generate_image
from phishmark.engine.pipeline import render_svg
from phishmark.models.requests import GenerateRequest
from phishmark.models.responses import GenerateResponse
from phishmark.render.rasterizer import encode_png, to_base64_png, to_data_url

logger = logging.getLogger(__name__)

router = APIRouter()


def resolve_size(size: int | None, settings: Settings) -> int:
    """Requested size or the configured default; above max_size is a 422."""
    resolved = size if size is not None else settings.default_size
    if resolved > settings.max_size:
        raise HTTPException(status_code=422, detail=f"size must be <= {settings.max_size}, got {resolved}")
    return resolved


@router.post("/generate", response_model=GenerateResponse)
async def generate(req: GenerateRequest, settings: Settings = Depends(get_settings)) -> GenerateResponse:
    size = resolve_size(req.size, settings)
    start = time.perf_counter()

    result = await run_in_threadpool(
        generate_image,
        req.identifier,
        size,
        overlay_seeded=settings.overlay_seeded,
        overlay_amount=settings.overlay_amount,
    )
    image = to_data_url(result.image) if req.format == "data_url" else to_base64_png(result.image)

    elapsed = (time.perf_counter() - start) * 1000
    return GenerateResponse(
        identifier=req.identifier,
        size=size,
        image=image,
        layout=result.layout.name.lower(),
        processing_time_ms=round(elapsed, 1),
    )


@router.get("/generate/{identifier}.png")
async def generate_png(
    identifier: str,
    size: int | None = Query(default=None, gt=0),
    settings: Settings = Depends(get_settings),
) -> Response:
    size = resolve_size(size, settings)
    result = await run_in_threadpool(
        generate_image,
        identifier,
        size,
        overlay_seeded=settings.overlay_seeded,
        overlay_amount=settings.overlay_amount,
    )
    return Response(
        content=encode_png(result.image),
        media_type="image/png",
        headers={"X-Phishmark-Layout": result.layout.name.lower()},
    )


@router.get("/generate/{identifier}.svg")
async def generate_svg(
    identifier: str,
    size: int | None = Query(default=None, gt=0),
    settings: Settings = Depends(get_settings),
) -> Response:
    size = resolve_size(size, settings)
    svg, generator = await run_in_threadpool(render_svg, identifier, size)
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"X-Phishmark-Layout": generator.layout.name.lower()},
    )
