"""Capability catalog.

Declares the descriptors of every capability the server exposes and
assembles them with their handlers into the process-wide registry.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from greeting_server.capabilities import (
    Capability,
    CapabilityDescriptor,
    CapabilityRegistry,
    ParamSpec,
)
from greeting_server.capabilities.envelope import JSON_MIME_TYPE
from greeting_server.config import get_settings
from greeting_server.handlers import (
    SUPPORTED_LANGUAGES,
    calculate,
    code_review,
    current_time,
    describe_server,
    generate_image,
    greet,
)
from greeting_server.handlers.calculator import OPERATORS
from greeting_server.inference import TextToImageClient
from greeting_server.types import CapabilityKind, ParamType

if TYPE_CHECKING:
    from greeting_server.config import Settings
    from greeting_server.handlers.image import ImageBackend

SERVER_INFO_URI = "server://info"

GREETING = CapabilityDescriptor(
    name="greeting",
    description="Greets a user by name in the requested language",
    input_shape={
        "name": ParamSpec(ParamType.STRING, "Name of the person to greet"),
        "language": ParamSpec(
            ParamType.STRING,
            f"Greeting language ({', '.join(SUPPORTED_LANGUAGES)})",
            enum=SUPPORTED_LANGUAGES,
        ),
    },
)

CALCULATOR = CapabilityDescriptor(
    name="calculator",
    description="Applies one of the four arithmetic operations (+, -, *, /) "
    "to two numbers",
    input_shape={
        "num1": ParamSpec(ParamType.NUMBER, "First number"),
        "num2": ParamSpec(ParamType.NUMBER, "Second number"),
        "operator": ParamSpec(
            ParamType.STRING, "Operator (+, -, *, /)", enum=OPERATORS
        ),
    },
)

CURRENT_TIME = CapabilityDescriptor(
    name="current-time",
    description="Returns the current time in a timezone. Uses the server's "
    "default timezone when none is given.",
    input_shape={
        "timezone": ParamSpec(
            ParamType.STRING,
            "IANA timezone name (e.g. Asia/Seoul, America/New_York, "
            "Europe/London)",
            required=False,
        ),
    },
)

GENERATE_IMAGE = CapabilityDescriptor(
    name="generate-image",
    description="Generates an AI image from a text prompt",
    input_shape={
        "prompt": ParamSpec(ParamType.STRING, "Text describing the image"),
    },
)

SERVER_INFO = CapabilityDescriptor(
    name="server-info",
    description="Detailed information about this server",
    kind=CapabilityKind.RESOURCE,
    uri=SERVER_INFO_URI,
    mime_type=JSON_MIME_TYPE,
)

CODE_REVIEW = CapabilityDescriptor(
    name="code_review",
    description="Builds a prompt asking for a detailed review of the given code",
    kind=CapabilityKind.PROMPT,
    input_shape={
        "code": ParamSpec(ParamType.STRING, "Code to review"),
        "language": ParamSpec(
            ParamType.STRING,
            "Programming language (e.g. TypeScript, Python, Java)",
            required=False,
        ),
        "focus": ParamSpec(
            ParamType.STRING,
            "Specific review focus (e.g. performance, security, readability)",
            required=False,
        ),
    },
)

DESCRIPTORS: tuple[CapabilityDescriptor, ...] = (
    GREETING,
    CALCULATOR,
    CURRENT_TIME,
    GENERATE_IMAGE,
    SERVER_INFO,
    CODE_REVIEW,
)


def build_registry(
    settings: Settings | None = None,
    image_backend: ImageBackend | None = None,
) -> CapabilityRegistry:
    """Build the registry of all capabilities.

    Args:
        settings: Settings to configure handlers; loaded from env if omitted.
        image_backend: Async prompt-to-bytes callable; defaults to the
            hosted inference client built from settings.

    Returns:
        The read-only registry.
    """
    if settings is None:
        settings = get_settings()
    if image_backend is None:
        image_backend = TextToImageClient.from_settings(settings)

    handlers = {
        GREETING.name: greet,
        CALCULATOR.name: calculate,
        CURRENT_TIME.name: functools.partial(
            current_time, default_timezone=settings.default_timezone
        ),
        GENERATE_IMAGE.name: functools.partial(generate_image, backend=image_backend),
        SERVER_INFO.name: functools.partial(
            describe_server,
            catalog=DESCRIPTORS,
            default_timezone=settings.default_timezone,
            image_model=settings.image_model,
        ),
        CODE_REVIEW.name: code_review,
    }

    return CapabilityRegistry(
        Capability(descriptor=d, handler=handlers[d.name]) for d in DESCRIPTORS
    )


__all__ = [
    "CALCULATOR",
    "CODE_REVIEW",
    "CURRENT_TIME",
    "DESCRIPTORS",
    "GENERATE_IMAGE",
    "GREETING",
    "SERVER_INFO",
    "SERVER_INFO_URI",
    "build_registry",
]
