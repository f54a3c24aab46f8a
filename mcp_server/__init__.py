"""MCP server exposing the greeting_server capabilities.

This module implements the Model Context Protocol (MCP) frontend that
exposes the capability registry to AI tools and external systems.

MCP handlers:
- Forward every request to the registry's dispatcher
- Report tool failures in-band with isError results
- Raise protocol errors only where MCP has no in-band error slot
"""

from mcp_server.server import create_server, run_stdio

__all__ = ["create_server", "run_stdio"]
