"""Registry dependency for FastAPI.

Provides the capability registry to route handlers via FastAPI dependency
injection. The registry is built once in the application lifespan and
stored on app state; it is read-only, so requests share it freely.
"""

from fastapi import Request

from greeting_server.capabilities import CapabilityRegistry


def get_registry(request: Request) -> CapabilityRegistry:
    """Get the capability registry from app state.

    Args:
        request: FastAPI request object.

    Returns:
        The application's capability registry.
    """
    registry: CapabilityRegistry = request.app.state.registry
    return registry
