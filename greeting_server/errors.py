"""Error definitions for capability dispatch.

This module defines the stable error codes surfaced to clients inside
error envelopes, and the exceptions raised while building the registry
or validating arguments.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Error code constants
UNKNOWN_CAPABILITY = "unknown_capability"
MISSING_FIELD = "missing_field"
TYPE_MISMATCH = "type_mismatch"
INVALID_ENUM_VALUE = "invalid_enum_value"
DOMAIN_ERROR = "domain_error"
INTERNAL_ERROR = "internal_error"


class ErrorKind(str, Enum):
    """Error category carried by an error envelope."""

    UNKNOWN_CAPABILITY = UNKNOWN_CAPABILITY
    MISSING_FIELD = MISSING_FIELD
    TYPE_MISMATCH = TYPE_MISMATCH
    INVALID_ENUM_VALUE = INVALID_ENUM_VALUE
    DOMAIN_ERROR = DOMAIN_ERROR
    INTERNAL_ERROR = INTERNAL_ERROR


@dataclass(frozen=True)
class ArgumentIssue:
    """A single problem found while validating arguments.

    Attributes:
        kind: Error category (missing field, type mismatch, enum value).
        field: Name of the offending parameter.
        message: Human-readable description.
    """

    kind: ErrorKind
    field: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"kind": self.kind.value, "field": self.field, "message": self.message}


class ArgumentValidationError(Exception):
    """Raised when raw arguments do not satisfy a capability's input shape."""

    def __init__(self, capability: str, issues: list[ArgumentIssue]) -> None:
        """Initialize ArgumentValidationError.

        Args:
            capability: Name of the capability being validated.
            issues: Problems found, in declaration order. Must not be empty.
        """
        if not issues:
            raise ValueError("issues must not be empty")
        self.capability = capability
        self.issues = issues
        self.kind = issues[0].kind
        self.code = self.kind.value
        summary = "; ".join(issue.message for issue in issues)
        super().__init__(f"Invalid arguments for '{capability}': {summary}")


class DuplicateCapabilityError(Exception):
    """Raised when two capabilities are registered under the same name."""

    def __init__(self, name: str, code: str = "duplicate_capability") -> None:
        super().__init__(f"Capability already registered: {name}")
        self.name = name
        self.code = code


__all__ = [
    "DOMAIN_ERROR",
    "INTERNAL_ERROR",
    "INVALID_ENUM_VALUE",
    "MISSING_FIELD",
    "TYPE_MISMATCH",
    "UNKNOWN_CAPABILITY",
    "ArgumentIssue",
    "ArgumentValidationError",
    "DuplicateCapabilityError",
    "ErrorKind",
]
