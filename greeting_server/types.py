"""Shared type definitions for greeting_server.

This module contains enums, dataclasses and type aliases shared across
subpackages to avoid circular imports.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from greeting_server.errors import DOMAIN_ERROR


class CapabilityKind(str, Enum):
    """Kind of an invocable capability."""

    TOOL = "tool"
    RESOURCE = "resource"
    PROMPT = "prompt"


class ParamType(str, Enum):
    """Primitive type of a declared input parameter."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"


class DispatchState(str, Enum):
    """Per-request dispatch state."""

    RECEIVED = "received"
    VALIDATING = "validating"
    INVOKING = "invoking"
    RESPONDED = "responded"


@dataclass(frozen=True)
class MediaBlob:
    """Raw binary media produced by a handler."""

    data: bytes
    mime_type: str


@dataclass(frozen=True)
class PromptMessage:
    """One role-tagged message of a prompt template result."""

    role: Literal["user", "assistant"]
    text: str


@dataclass(frozen=True)
class DomainFailure:
    """Failure intrinsic to a capability's own logic.

    Handlers return this instead of raising, so that every expected failure
    path is an explicit value.

    Attributes:
        message: Human-readable explanation shown to the caller.
        code: Stable error code for programmatic handling.
        details: Optional additional details (logged, not shown).
    """

    message: str
    code: str = DOMAIN_ERROR
    details: dict[str, Any] = field(default_factory=dict)


# Whatever a handler may hand back to the normalizer.
HandlerResult = str | dict[str, Any] | MediaBlob | list[PromptMessage] | DomainFailure

Handler = Callable[..., HandlerResult | Awaitable[HandlerResult]]

ValidatedArguments = Mapping[str, Any]


__all__ = [
    "CapabilityKind",
    "DispatchState",
    "DomainFailure",
    "Handler",
    "HandlerResult",
    "MediaBlob",
    "ParamType",
    "PromptMessage",
    "ValidatedArguments",
]
