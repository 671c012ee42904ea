"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from phishmark import __version__
from phishmark.config import settings
from phishmark.engine.errors import ValidationError

load_dotenv()

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format=LOG_FORMAT,
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="phishmark",
        description="Deterministic identifier images for spotting spoofed pages",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    # Import all layout modules so @layout decorators fire
    from phishmark.engine.registry import load_layouts

    load_layouts()

    from phishmark.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
