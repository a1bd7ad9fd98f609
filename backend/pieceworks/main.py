"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pieceworks import __version__
from pieceworks.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.pieceworks_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Pieceworks",
        description="Parameterized SVG asset generators — digits, tiles, game pieces and dice",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all display modules to trigger registration
    register_displays()

    from pieceworks.api.router import api_router

    app.include_router(api_router)

    return app


def register_displays() -> None:
    """Import every module under pieceworks.displays so @display_type decorators fire."""
    import importlib
    import pkgutil

    package = importlib.import_module("pieceworks.displays")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"pieceworks.displays.{module_name}")


app = create_app()
