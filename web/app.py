"""FastAPI application factory and main app.

This module creates the FastAPI application with all routers and
dependency injection configured.

Web routes are thin proxies to the capability registry.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from greeting_server import __version__
from greeting_server.catalog import build_registry
from web.routers import capabilities, config, health


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager.

    Builds the capability registry on startup unless one was injected.
    """
    if getattr(app.state, "registry", None) is None:
        app.state.registry = build_registry()
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    application = FastAPI(
        title="Greeting Server API",
        description="HTTP API for discovering and invoking greeting-server "
        "capabilities",
        version=__version__,
        lifespan=lifespan,
    )

    # Include routers
    application.include_router(health.router, tags=["health"])
    application.include_router(config.router, prefix="/config", tags=["config"])
    application.include_router(capabilities.router, tags=["capabilities"])

    return application


# Create the default application instance
app = create_app()
