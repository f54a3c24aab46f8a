"""FastAPI web application for Greeting Server.

This module provides the HTTP frontend over the capability registry.

All capability logic is delegated to core modules in greeting_server/.
"""

from web.app import app, create_app

__all__ = ["app", "create_app"]
