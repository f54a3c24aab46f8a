"""Capability descriptors.

A descriptor is the static metadata of one capability: its name, a
human-readable description, its kind and the shape its input must have.
Descriptors are immutable once built and are what frontends expose for
discovery.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from greeting_server.types import CapabilityKind, ParamType


@dataclass(frozen=True)
class ParamSpec:
    """Type and constraint spec for one input parameter.

    Attributes:
        type: Primitive type of the value.
        description: Help text surfaced to clients.
        required: Whether the parameter must be present.
        enum: Allowed values, if the parameter is enumerated.
        default: Value substituted when an optional parameter is absent.
            None means the parameter is simply omitted.
    """

    type: ParamType
    description: str = ""
    required: bool = True
    enum: tuple[str, ...] | None = None
    default: Any = None

    def __post_init__(self) -> None:
        """Validate the spec itself."""
        if self.enum is not None:
            if not self.enum:
                raise ValueError("enum must list at least one value")
            if self.type is not ParamType.STRING:
                raise ValueError("enum is only supported for string parameters")
        if self.required and self.default is not None:
            raise ValueError("required parameters cannot declare a default")

    def json_schema(self) -> dict[str, Any]:
        """Render this parameter as a JSON Schema property."""
        schema: dict[str, Any] = {"type": self.type.value}
        if self.description:
            schema["description"] = self.description
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        return schema


InputShape = Mapping[str, ParamSpec]


@dataclass(frozen=True)
class CapabilityDescriptor:
    """Static metadata for a capability.

    Attributes:
        name: Unique identifier within the registry.
        description: Free text for discovery.
        kind: Tool, resource or prompt.
        input_shape: Parameter name to spec, frozen on construction.
        uri: Address of a resource capability.
        mime_type: MIME type of a resource capability's content.
    """

    name: str
    description: str
    kind: CapabilityKind = CapabilityKind.TOOL
    input_shape: InputShape = field(default_factory=dict)
    uri: str | None = None
    mime_type: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name must be provided")
        if self.kind is CapabilityKind.RESOURCE:
            if not self.uri:
                raise ValueError(f"resource '{self.name}' must declare a uri")
            if self.input_shape:
                raise ValueError(f"resource '{self.name}' takes no input")
        # Freeze the shape so later mutation of the caller's dict has no effect
        object.__setattr__(
            self, "input_shape", MappingProxyType(dict(self.input_shape))
        )

    def input_schema(self) -> dict[str, Any]:
        """Return the input shape as a JSON Schema object."""
        return {
            "type": "object",
            "properties": {
                name: spec.json_schema() for name, spec in self.input_shape.items()
            },
            "required": [
                name for name, spec in self.input_shape.items() if spec.required
            ],
        }

    def prompt_arguments(self) -> list[dict[str, Any]]:
        """Return the input shape as a prompt argument list."""
        return [
            {
                "name": name,
                "description": spec.description,
                "required": spec.required,
            }
            for name, spec in self.input_shape.items()
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "kind": self.kind.value,
            "inputSchema": self.input_schema(),
        }
        if self.uri is not None:
            result["uri"] = self.uri
        if self.mime_type is not None:
            result["mimeType"] = self.mime_type
        return result


__all__ = ["CapabilityDescriptor", "InputShape", "ParamSpec"]
