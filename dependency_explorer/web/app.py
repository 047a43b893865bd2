"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from dependency_explorer import __version__
from dependency_explorer.web.api import router


def create_app() -> FastAPI:
    app = FastAPI(title="dependency-explorer", version=__version__)
    app.include_router(router)
    return app
