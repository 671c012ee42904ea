"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from phishmark import __version__
from phishmark.engine.palettes import load_palettes
from phishmark.engine.registry import get_registry
from phishmark.models.responses import HealthResponse, PaletteEntry, PalettesResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        palettes=len(load_palettes()),
        layouts_registered=get_registry().count,
    )


@router.get("/palettes", response_model=PalettesResponse)
async def palettes() -> PalettesResponse:
    catalog = load_palettes()
    return PalettesResponse(
        version=catalog.version,
        count=len(catalog),
        palettes=[
            PaletteEntry(index=p.index, colors=[c.to_hex() for c in p.colors]) for p in catalog.palettes
        ],
    )
