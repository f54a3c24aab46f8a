"""MCP server implementation.

This module creates the low-level MCP server and wires its list/call/read/get
handlers to the capability registry. The handlers are thin translators:
- Arguments go to the registry's dispatcher unchanged (the SDK's own input
  validation is disabled so the dispatcher is the single validator)
- Response envelopes are converted to MCP result types
"""

import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from greeting_server import __version__
from greeting_server.capabilities import (
    BinaryMediaContent,
    CapabilityRegistry,
    ResponseEnvelope,
    StructuredContent,
    TextContent,
)
from greeting_server.catalog import build_registry
from greeting_server.handlers.server_info import SERVER_NAME
from greeting_server.types import CapabilityKind

logger = logging.getLogger(__name__)


def to_mcp_content(
    envelope: ResponseEnvelope,
) -> list[types.TextContent | types.ImageContent]:
    """Convert envelope content items to MCP content blocks.

    Structured messages are flattened to text blocks, since tool results
    have no message type.
    """
    blocks: list[types.TextContent | types.ImageContent] = []
    for item in envelope.content:
        if isinstance(item, TextContent):
            blocks.append(types.TextContent(type="text", text=item.text))
        elif isinstance(item, BinaryMediaContent):
            blocks.append(
                types.ImageContent(type="image", data=item.data, mimeType=item.mime_type)
            )
        elif isinstance(item, StructuredContent):
            blocks.extend(
                types.TextContent(type="text", text=message.text)
                for message in item.messages
            )
    return blocks


def to_call_tool_result(envelope: ResponseEnvelope) -> types.CallToolResult:
    """Convert an envelope to an MCP tool result."""
    return types.CallToolResult(
        content=to_mcp_content(envelope),
        isError=envelope.is_error,
    )


def list_tools(registry: CapabilityRegistry) -> list[types.Tool]:
    """Describe the registry's tools."""
    return [
        types.Tool(
            name=d.name,
            description=d.description,
            inputSchema=d.input_schema(),
        )
        for d in registry.descriptors(CapabilityKind.TOOL)
    ]


async def call_tool(
    registry: CapabilityRegistry, name: str, arguments: dict[str, Any] | None
) -> types.CallToolResult:
    """Dispatch a tool call. Failures come back as isError results."""
    envelope = await registry.dispatch(CapabilityKind.TOOL, name, arguments)
    return to_call_tool_result(envelope)


def list_resources(registry: CapabilityRegistry) -> list[types.Resource]:
    """Describe the registry's resources."""
    return [
        types.Resource(
            uri=d.uri,
            name=d.name,
            description=d.description,
            mimeType=d.mime_type,
        )
        for d in registry.descriptors(CapabilityKind.RESOURCE)
        if d.uri is not None
    ]


async def read_resource(
    registry: CapabilityRegistry, uri: str
) -> list[ReadResourceContents]:
    """Read a resource by URI.

    Raises:
        McpError: If no resource has this URI or reading it failed.
    """
    descriptor = registry.resolve_uri(uri) or registry.resolve_uri(uri.rstrip("/"))
    if descriptor is None:
        raise McpError(
            types.ErrorData(code=types.INVALID_PARAMS, message=f"Resource not found: {uri}")
        )

    envelope = await registry.dispatch(CapabilityKind.RESOURCE, descriptor.name)
    if envelope.is_error:
        raise McpError(
            types.ErrorData(code=types.INTERNAL_ERROR, message=envelope.text)
        )
    return [
        ReadResourceContents(
            content=item.text, mime_type=item.mime_type or descriptor.mime_type
        )
        for item in envelope.content
        if isinstance(item, TextContent)
    ]


def list_prompts(registry: CapabilityRegistry) -> list[types.Prompt]:
    """Describe the registry's prompt templates."""
    return [
        types.Prompt(
            name=d.name,
            description=d.description,
            arguments=[types.PromptArgument(**arg) for arg in d.prompt_arguments()],
        )
        for d in registry.descriptors(CapabilityKind.PROMPT)
    ]


async def get_prompt(
    registry: CapabilityRegistry, name: str, arguments: dict[str, str] | None
) -> types.GetPromptResult:
    """Render a prompt template.

    Raises:
        McpError: If the prompt is unknown or its arguments are invalid.
            Prompt results carry no error flag, so errors are raised.
    """
    envelope = await registry.dispatch(CapabilityKind.PROMPT, name, arguments)
    if envelope.is_error:
        raise McpError(
            types.ErrorData(code=types.INVALID_PARAMS, message=envelope.text)
        )

    capability = registry.get(name)
    messages = [
        types.PromptMessage(
            role=message.role,
            content=types.TextContent(type="text", text=message.text),
        )
        for item in envelope.content
        if isinstance(item, StructuredContent)
        for message in item.messages
    ]
    return types.GetPromptResult(
        description=capability.descriptor.description if capability else None,
        messages=messages,
    )


def create_server(registry: CapabilityRegistry | None = None) -> Server:
    """Create the MCP server bound to a registry.

    Args:
        registry: Capability registry; the default catalog if omitted.

    Returns:
        Low-level MCP server with all handlers registered.
    """
    if registry is None:
        registry = build_registry()

    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return list_tools(registry)

    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        return await call_tool(registry, name, arguments)

    @server.list_resources()
    async def _list_resources() -> list[types.Resource]:
        return list_resources(registry)

    @server.read_resource()
    async def _read_resource(uri: Any) -> list[ReadResourceContents]:
        return await read_resource(registry, str(uri))

    @server.list_prompts()
    async def _list_prompts() -> list[types.Prompt]:
        return list_prompts(registry)

    @server.get_prompt()
    async def _get_prompt(
        name: str, arguments: dict[str, str] | None
    ) -> types.GetPromptResult:
        return await get_prompt(registry, name, arguments)

    return server


async def run_stdio(registry: CapabilityRegistry | None = None) -> None:
    """Serve the registry over MCP stdio until the client disconnects."""
    server = create_server(registry)
    logger.info("Starting %s v%s on stdio", SERVER_NAME, __version__)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )
    logger.info("Server stopped")


__all__ = [
    "call_tool",
    "create_server",
    "get_prompt",
    "list_prompts",
    "list_resources",
    "list_tools",
    "read_resource",
    "run_stdio",
    "to_call_tool_result",
    "to_mcp_content",
]
