"""Server self-description resource."""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from greeting_server import __version__
from greeting_server.capabilities.descriptors import CapabilityDescriptor
from greeting_server.config import DEFAULT_IMAGE_MODEL, DEFAULT_TIMEZONE
from greeting_server.handlers.calculator import OPERATORS
from greeting_server.handlers.clock import utcnow
from greeting_server.handlers.greeting import SUPPORTED_LANGUAGES
from greeting_server.types import CapabilityKind

SERVER_NAME = "greeting-server"
SERVER_DESCRIPTION = (
    "Capability server offering multilingual greetings, a calculator, "
    "current time, image generation and code review prompts"
)
SERVER_AUTHOR = "MCP Server"


def _names(catalog: Sequence[CapabilityDescriptor], kind: CapabilityKind) -> list[str]:
    return [d.name for d in catalog if d.kind is kind]


def describe_server(
    *,
    catalog: Sequence[CapabilityDescriptor],
    default_timezone: str = DEFAULT_TIMEZONE,
    image_model: str = DEFAULT_IMAGE_MODEL,
    clock: Callable[[], datetime] = utcnow,
) -> dict[str, Any]:
    """Build the server information document.

    Everything but ``lastUpdated`` is static; the timestamp is taken from
    the clock on every call.
    """
    languages = list(SUPPORTED_LANGUAGES)
    return {
        "name": SERVER_NAME,
        "version": __version__,
        "description": SERVER_DESCRIPTION,
        "capabilities": {
            "tools": _names(catalog, CapabilityKind.TOOL),
            "resources": _names(catalog, CapabilityKind.RESOURCE),
            "prompts": _names(catalog, CapabilityKind.PROMPT),
        },
        "supportedLanguages": languages,
        "features": [
            {
                "name": "greeting",
                "description": f"Personalized greetings in {len(languages)} languages",
                "languages": languages,
            },
            {
                "name": "calculator",
                "description": "Basic arithmetic (addition, subtraction, "
                "multiplication, division)",
                "operations": list(OPERATORS),
            },
            {
                "name": "current-time",
                "description": "Current time for an IANA timezone",
                "defaultTimezone": default_timezone,
            },
            {
                "name": "generate-image",
                "description": f"AI text-to-image generation ({image_model})",
                "parameters": ["prompt"],
            },
            {
                "name": "code_review",
                "description": "Detailed code review prompt covering seven areas "
                "(quality, bugs, performance, security, style, best practices, "
                "maintainability)",
                "parameters": ["code", "language (optional)", "focus (optional)"],
            },
        ],
        "author": SERVER_AUTHOR,
        "lastUpdated": clock().isoformat(),
    }


__all__ = ["SERVER_NAME", "describe_server"]
