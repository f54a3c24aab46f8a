"""Router modules for FastAPI web API."""

from web.routers import capabilities, config, health

__all__ = ["capabilities", "config", "health"]
