"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from theme_converter.interface.dependencies import shutdown, startup
from theme_converter.interface.error_handlers import (
    error_responses,
    register_error_handlers,
)
from theme_converter.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitHub Repo → WordPress Theme Converter",
        version="1.0.0",
        description=(
            "Takes a public GitHub repository and returns the files of a "
            "WordPress theme built from its HTML, CSS and JavaScript."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    # Every route can surface any mapped domain error.
    app.include_router(router, responses=error_responses())

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
