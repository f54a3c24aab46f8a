"""Capability registry and dispatcher.

The registry is built once from a fixed list of (descriptor, handler)
pairs and is read-only afterwards. dispatch() is the sole entry point for
frontends and drives each request through four states:

    received -> validating -> invoking -> responded

Whatever fails along the way, exactly one envelope is returned.
"""

import inspect
import logging
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from greeting_server.capabilities.descriptors import CapabilityDescriptor
from greeting_server.capabilities.envelope import (
    ResponseEnvelope,
    error_envelope,
    normalize,
)
from greeting_server.capabilities.validation import validate
from greeting_server.errors import (
    ArgumentValidationError,
    DuplicateCapabilityError,
    ErrorKind,
)
from greeting_server.types import CapabilityKind, DispatchState, Handler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capability:
    """A registered capability: its descriptor and the handler behind it."""

    descriptor: CapabilityDescriptor
    handler: Handler

    @property
    def name(self) -> str:
        return self.descriptor.name


class DispatchRequest(BaseModel):
    """Inbound request shape handed over by a frontend."""

    model_config = ConfigDict(extra="forbid")

    kind: CapabilityKind = Field(description="tool, resource or prompt")
    name: str = Field(description="Capability name")
    args: dict[str, Any] = Field(default_factory=dict, description="Arguments")


class CapabilityRegistry:
    """Read-only table of capabilities plus the request dispatcher.

    Usage:
        registry = CapabilityRegistry([Capability(descriptor, handler), ...])
        envelope = await registry.dispatch("tool", "greeting", {...})
    """

    def __init__(self, capabilities: Iterable[Capability]) -> None:
        """Build the registry.

        Args:
            capabilities: Capabilities to register.

        Raises:
            DuplicateCapabilityError: If two capabilities share a name or
                two resources share a URI.
        """
        table: dict[str, Capability] = {}
        uris: dict[str, str] = {}
        for capability in capabilities:
            if capability.name in table:
                raise DuplicateCapabilityError(capability.name)
            uri = capability.descriptor.uri
            if uri is not None:
                if uri in uris:
                    raise DuplicateCapabilityError(uri)
                uris[uri] = capability.name
            table[capability.name] = capability

        self._table: Mapping[str, Capability] = MappingProxyType(table)
        self._uris: Mapping[str, str] = MappingProxyType(uris)
        logger.info("Registered %d capabilities: %s", len(table), list(table))

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __len__(self) -> int:
        return len(self._table)

    def get(self, name: str) -> Capability | None:
        """Look up a capability by name."""
        return self._table.get(name)

    def resolve_uri(self, uri: str) -> CapabilityDescriptor | None:
        """Look up a resource descriptor by its URI."""
        name = self._uris.get(uri)
        return self._table[name].descriptor if name is not None else None

    def descriptors(
        self, kind: CapabilityKind | None = None
    ) -> list[CapabilityDescriptor]:
        """List descriptors in registration order, optionally by kind."""
        return [
            c.descriptor
            for c in self._table.values()
            if kind is None or c.descriptor.kind is kind
        ]

    def catalog(self) -> list[dict[str, Any]]:
        """Discovery catalog: every descriptor as a plain dict."""
        return [d.to_dict() for d in self.descriptors()]

    async def handle(self, request: DispatchRequest) -> ResponseEnvelope:
        """Dispatch a parsed inbound request."""
        return await self.dispatch(request.kind, request.name, request.args)

    async def dispatch(
        self,
        kind: CapabilityKind | str,
        name: str,
        args: Mapping[str, Any] | None = None,
    ) -> ResponseEnvelope:
        """Validate, invoke and normalize one request.

        Args:
            kind: Kind of capability the client is addressing.
            name: Capability name.
            args: Raw argument bag (None means empty).

        Returns:
            Exactly one envelope. Never raises for request, validation or
            handler failures.
        """
        request_id = uuid.uuid4().hex[:8]
        kind_label = getattr(kind, "value", kind)
        self._transition(request_id, DispatchState.RECEIVED, f"{kind_label}:{name}")

        capability = self._table.get(name)
        try:
            kind = CapabilityKind(kind)
        except ValueError:
            capability = None
        if capability is None or capability.descriptor.kind is not kind:
            logger.warning(
                "[%s] Unknown %s capability: %s", request_id, kind_label, name
            )
            return self._respond(
                request_id,
                error_envelope(
                    ErrorKind.UNKNOWN_CAPABILITY,
                    f"Unknown capability: {name}",
                ),
            )

        self._transition(request_id, DispatchState.VALIDATING, name)
        try:
            validated = validate(capability.descriptor.input_shape, args, name)
        except ArgumentValidationError as e:
            logger.warning("[%s] %s", request_id, e)
            return self._respond(request_id, normalize(e))

        self._transition(request_id, DispatchState.INVOKING, name)
        outcome: Any
        try:
            outcome = capability.handler(**validated)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as e:
            logger.error(
                "[%s] Capability %s failed: %s", request_id, name, e, exc_info=True
            )
            outcome = e

        envelope = normalize(outcome)
        if envelope.is_error and envelope.error_kind is ErrorKind.DOMAIN_ERROR:
            logger.warning("[%s] %s: %s", request_id, name, envelope.text)
        return self._respond(request_id, envelope)

    @staticmethod
    def _transition(request_id: str, state: DispatchState, detail: str) -> None:
        logger.debug("[%s] %s %s", request_id, state.value, detail)

    def _respond(self, request_id: str, envelope: ResponseEnvelope) -> ResponseEnvelope:
        self._transition(
            request_id,
            DispatchState.RESPONDED,
            "error" if envelope.is_error else "ok",
        )
        return envelope


__all__ = ["Capability", "CapabilityRegistry", "DispatchRequest"]
