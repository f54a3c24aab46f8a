"""Liveness and service index endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from greeting_server import __version__
from greeting_server.capabilities import CapabilityRegistry
from greeting_server.handlers.server_info import SERVER_NAME
from web.deps import get_registry

router = APIRouter()


@router.get("/health")
def health(registry: CapabilityRegistry = Depends(get_registry)) -> dict[str, Any]:
    """Report liveness and how many capabilities are registered."""
    return {"status": "ok", "version": __version__, "capabilities": len(registry)}


@router.get("/")
def root() -> dict[str, Any]:
    """Service index: identity plus the discovery and dispatch endpoints."""
    return {
        "name": "Greeting Server API",
        "server": SERVER_NAME,
        "version": __version__,
        "endpoints": {
            "capabilities": "/capabilities",
            "dispatch": "/dispatch",
        },
    }
