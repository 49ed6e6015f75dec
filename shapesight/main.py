"""FastAPI app factory."""

from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shapesight import __version__
from shapesight.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.shapesight_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ShapeSight",
        description="Geometric shape detection for raster images",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all transform modules to trigger registration
    from shapesight.engine.registry import load_transforms

    load_transforms()

    from shapesight.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.shapesight_log_level)
