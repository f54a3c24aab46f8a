"""Capability discovery and dispatch endpoints.

- GET /capabilities - List capability descriptors
- GET /capabilities/{name} - Get one descriptor
- POST /dispatch - Invoke a capability and return its response envelope

Dispatch always answers 200: request, validation and domain errors are
reported in-band through the envelope's is_error flag.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from greeting_server.capabilities import (
    CapabilityRegistry,
    DispatchRequest,
    ResponseEnvelope,
)
from greeting_server.types import CapabilityKind
from web.deps import get_registry

router = APIRouter()


@router.get("/capabilities")
def list_capabilities(
    kind: CapabilityKind | None = Query(None, description="Filter by kind"),
    registry: CapabilityRegistry = Depends(get_registry),
) -> list[dict[str, Any]]:
    """List capability descriptors.

    Args:
        kind: Optional kind filter (tool, resource, prompt).
        registry: Capability registry.

    Returns:
        Descriptors in registration order.
    """
    return [d.to_dict() for d in registry.descriptors(kind)]


@router.get("/capabilities/{name}")
def get_capability(
    name: str,
    registry: CapabilityRegistry = Depends(get_registry),
) -> dict[str, Any]:
    """Get a capability descriptor by name.

    Raises:
        HTTPException: If no capability has this name.
    """
    capability = registry.get(name)
    if capability is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "unknown_capability", "message": f"Unknown capability: {name}"},
        )
    return capability.descriptor.to_dict()


@router.post("/dispatch")
async def dispatch(
    request: DispatchRequest,
    registry: CapabilityRegistry = Depends(get_registry),
) -> ResponseEnvelope:
    """Invoke a capability.

    Args:
        request: Capability kind, name and arguments.
        registry: Capability registry.

    Returns:
        The response envelope.
    """
    return await registry.handle(request)
