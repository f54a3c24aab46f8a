"""Capability registry and dispatch contract.

This module handles:
- Capability descriptors and their input shapes
- Validation of raw arguments against an input shape
- The response envelope and the normalizer that builds it
- The read-only registry and its request dispatcher
"""

from greeting_server.capabilities.descriptors import (
    CapabilityDescriptor,
    InputShape,
    ParamSpec,
)
from greeting_server.capabilities.envelope import (
    BinaryMediaContent,
    ContentItem,
    MessagePart,
    ResponseEnvelope,
    StructuredContent,
    TextContent,
    error_envelope,
    normalize,
    text_envelope,
)
from greeting_server.capabilities.registry import (
    Capability,
    CapabilityRegistry,
    DispatchRequest,
)
from greeting_server.capabilities.validation import validate

__all__ = [
    "BinaryMediaContent",
    "Capability",
    "CapabilityDescriptor",
    "CapabilityRegistry",
    "ContentItem",
    "DispatchRequest",
    "InputShape",
    "MessagePart",
    "ParamSpec",
    "ResponseEnvelope",
    "StructuredContent",
    "TextContent",
    "error_envelope",
    "normalize",
    "text_envelope",
    "validate",
]
