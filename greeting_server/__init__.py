"""Greeting Server - a small capability server with a typed dispatch core.

This package provides a registry of named capabilities (tools, one resource
and one prompt template), input validation against declared shapes, and a
uniform response envelope for every request.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
