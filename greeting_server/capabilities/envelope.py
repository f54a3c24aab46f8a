"""Response envelope and normalizer.

Every request produces exactly one ResponseEnvelope. Handlers return plain
domain values; normalize() turns them, or the failure that replaced them,
into one of three content kinds:

- text: a string payload, optionally MIME-tagged (JSON documents)
- binary_media: base64 data plus a MIME type (images)
- structured: role-tagged prompt messages
"""

import base64
import json
import logging
from collections.abc import Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from greeting_server.errors import ArgumentValidationError, ErrorKind
from greeting_server.types import DomainFailure, MediaBlob, PromptMessage

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


class TextContent(BaseModel):
    """Plain text content item."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["text"] = "text"
    text: str
    mime_type: str | None = None


class BinaryMediaContent(BaseModel):
    """Binary media content item, base64 encoded."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["binary_media"] = "binary_media"
    data: str
    mime_type: str

    def decode(self) -> bytes:
        """Return the raw bytes."""
        return base64.b64decode(self.data)


class MessagePart(BaseModel):
    """A role-tagged message inside structured content."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    role: Literal["user", "assistant"]
    text: str


class StructuredContent(BaseModel):
    """Structured content item: a sequence of prompt messages."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["structured"] = "structured"
    messages: tuple[MessagePart, ...]


ContentItem = Annotated[
    TextContent | BinaryMediaContent | StructuredContent,
    Field(discriminator="type"),
]


class ResponseEnvelope(BaseModel):
    """Uniform response for every request, success or failure.

    When is_error is set the content is a single text item explaining the
    failure, and error_kind names its category.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: tuple[ContentItem, ...]
    is_error: bool = False
    error_kind: ErrorKind | None = None

    @property
    def text(self) -> str:
        """Concatenated text of all text content items."""
        return "\n".join(
            item.text for item in self.content if isinstance(item, TextContent)
        )


def text_envelope(text: str, mime_type: str | None = None) -> ResponseEnvelope:
    """Build a successful envelope holding one text item."""
    return ResponseEnvelope(content=(TextContent(text=text, mime_type=mime_type),))


def error_envelope(kind: ErrorKind, message: str) -> ResponseEnvelope:
    """Build an error envelope holding one explanatory text item."""
    return ResponseEnvelope(
        content=(TextContent(text=message),),
        is_error=True,
        error_kind=kind,
    )


def _is_message_list(value: Any) -> bool:
    return (
        isinstance(value, Sequence)
        and not isinstance(value, str | bytes)
        and all(isinstance(item, PromptMessage) for item in value)
    )


def normalize(outcome: Any) -> ResponseEnvelope:
    """Convert a handler outcome into a response envelope.

    Args:
        outcome: A handler's return value, a DomainFailure, or an exception
            caught while validating or invoking.

    Returns:
        The envelope for the request. Never raises.
    """
    if isinstance(outcome, DomainFailure):
        return error_envelope(ErrorKind.DOMAIN_ERROR, outcome.message)

    if isinstance(outcome, ArgumentValidationError):
        return error_envelope(outcome.kind, str(outcome))

    if isinstance(outcome, BaseException):
        return error_envelope(
            ErrorKind.INTERNAL_ERROR,
            f"Internal error: {type(outcome).__name__}: {outcome}",
        )

    try:
        return _wrap_result(outcome)
    except Exception as e:
        logger.error(
            "Could not encode %s result: %s", type(outcome).__name__, e, exc_info=True
        )
        return error_envelope(
            ErrorKind.INTERNAL_ERROR,
            f"Internal error: could not encode {type(outcome).__name__} result: {e}",
        )


def _wrap_result(outcome: Any) -> ResponseEnvelope:
    if isinstance(outcome, str):
        return text_envelope(outcome)

    if isinstance(outcome, dict):
        return text_envelope(
            json.dumps(outcome, indent=2, ensure_ascii=False), JSON_MIME_TYPE
        )

    if isinstance(outcome, MediaBlob):
        encoded = base64.b64encode(outcome.data).decode("ascii")
        return ResponseEnvelope(
            content=(BinaryMediaContent(data=encoded, mime_type=outcome.mime_type),)
        )

    if _is_message_list(outcome):
        parts = tuple(MessagePart(role=m.role, text=m.text) for m in outcome)
        return ResponseEnvelope(content=(StructuredContent(messages=parts),))

    logger.error("Handler returned unsupported result type: %s", type(outcome))
    return error_envelope(
        ErrorKind.INTERNAL_ERROR,
        f"Internal error: unsupported result type {type(outcome).__name__}",
    )


__all__ = [
    "JSON_MIME_TYPE",
    "BinaryMediaContent",
    "ContentItem",
    "MessagePart",
    "ResponseEnvelope",
    "StructuredContent",
    "TextContent",
    "error_envelope",
    "normalize",
    "text_envelope",
]
