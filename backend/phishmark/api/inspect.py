"""POST /api/inspect — pre-rasterization decisions for an identifier."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from phishmark.api.generate import resolve_size
from phishmark.config import Settings
from phishmark.dependencies import get_settings
from phishmark.engine.pipeline import inspect as inspect_identifier
from phishmark.models.requests import InspectRequest
from phishmark.models.responses import InspectResponse

router = APIRouter()


@router.post("/inspect", response_model=InspectResponse)
async def inspect(req: InspectRequest, settings: Settings = Depends(get_settings)) -> InspectResponse:
    size = resolve_size(req.size, settings)
    state, layout = await run_in_threadpool(inspect_identifier, req.identifier, size)
    summary = state.summary()
    return InspectResponse(
        identifier=req.identifier,
        size=size,
        noise_seed=summary["noise_seed"],
        random_seed=summary["random_seed"],
        layout=layout.name.lower(),
        style=summary["style"],
        palette=summary["palette"],
        octaves=summary["octaves"],
        falloff=summary["falloff"],
        angle_step=summary["angle_step"],
        field_shape=summary["field_shape"],
    )
