"""Tests for the MCP frontend.

The translation functions are exercised directly against a registry with
a fake image backend; no stdio transport is involved.
"""

import base64
import json

import mcp.types as types
import pytest
from mcp.shared.exceptions import McpError

from greeting_server.capabilities import normalize
from greeting_server.types import PromptMessage
from mcp_server.server import (
    call_tool,
    create_server,
    get_prompt,
    list_prompts,
    list_resources,
    list_tools,
    read_resource,
    to_mcp_content,
)


class TestListing:
    """Test capability discovery over MCP."""

    def test_list_tools(self, registry) -> None:
        """All four tools should be listed with their input schemas."""
        tools = {tool.name: tool for tool in list_tools(registry)}

        assert set(tools) == {"greeting", "calculator", "current-time", "generate-image"}
        schema = tools["greeting"].inputSchema
        assert schema["required"] == ["name", "language"]
        assert "english" in schema["properties"]["language"]["enum"]

    def test_list_resources(self, registry) -> None:
        """The server-info resource should be listed by URI."""
        resources = list_resources(registry)

        assert len(resources) == 1
        assert str(resources[0].uri).rstrip("/") == "server://info"
        assert resources[0].mimeType == "application/json"

    def test_list_prompts(self, registry) -> None:
        """The code_review prompt should list its arguments."""
        prompts = list_prompts(registry)

        assert [p.name for p in prompts] == ["code_review"]
        arguments = {a.name: a.required for a in prompts[0].arguments or []}
        assert arguments == {"code": True, "language": False, "focus": False}


class TestCallTool:
    """Test tool calls over MCP."""

    @pytest.mark.asyncio
    async def test_text_result(self, registry) -> None:
        """A text result should become a text block."""
        result = await call_tool(registry, "greeting", {"name": "Ann", "language": "french"})

        assert result.isError is False
        assert isinstance(result.content[0], types.TextContent)
        assert result.content[0].text == "Bonjour, Ann!"

    @pytest.mark.asyncio
    async def test_image_result(self, registry, image_backend) -> None:
        """A media result should become an image block."""
        result = await call_tool(registry, "generate-image", {"prompt": "a red fox"})

        block = result.content[0]
        assert isinstance(block, types.ImageContent)
        assert block.mimeType == "image/png"
        assert base64.b64decode(block.data) == image_backend.data

    @pytest.mark.asyncio
    async def test_domain_error(self, registry) -> None:
        """Domain failures should be flagged as errors, not raised."""
        result = await call_tool(
            registry, "calculator", {"num1": 1, "num2": 0, "operator": "/"}
        )

        assert result.isError is True
        assert "division by zero" in result.content[0].text

    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry) -> None:
        """An unknown tool should be an error result."""
        result = await call_tool(registry, "teleport", {})

        assert result.isError is True
        assert "Unknown capability: teleport" in result.content[0].text

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, registry) -> None:
        """Invalid arguments should be an error result."""
        result = await call_tool(registry, "greeting", None)

        assert result.isError is True
        assert "'name' is required" in result.content[0].text


class TestReadResource:
    """Test resource reads over MCP."""

    @pytest.mark.asyncio
    async def test_read_server_info(self, registry) -> None:
        """Reading the URI should return the JSON document."""
        contents = await read_resource(registry, "server://info")

        assert len(contents) == 1
        assert contents[0].mime_type == "application/json"
        assert json.loads(contents[0].content)["name"] == "greeting-server"

    @pytest.mark.asyncio
    async def test_trailing_slash(self, registry) -> None:
        """A normalized URI with a trailing slash should still resolve."""
        contents = await read_resource(registry, "server://info/")
        assert len(contents) == 1

    @pytest.mark.asyncio
    async def test_unknown_uri(self, registry) -> None:
        """An unknown URI should raise an MCP error."""
        with pytest.raises(McpError) as exc_info:
            await read_resource(registry, "server://nothing")

        assert exc_info.value.error.code == types.INVALID_PARAMS
        assert "server://nothing" in exc_info.value.error.message


class TestGetPrompt:
    """Test prompt rendering over MCP."""

    @pytest.mark.asyncio
    async def test_render(self, registry) -> None:
        """The prompt should render to a user message."""
        result = await get_prompt(
            registry, "code_review", {"code": "x = 1", "focus": "readability"}
        )

        assert len(result.messages) == 1
        message = result.messages[0]
        assert message.role == "user"
        assert isinstance(message.content, types.TextContent)
        assert "x = 1" in message.content.text
        assert "**Review focus**: readability" in message.content.text
        assert result.description

    @pytest.mark.asyncio
    async def test_missing_argument(self, registry) -> None:
        """A missing required argument should raise an MCP error."""
        with pytest.raises(McpError) as exc_info:
            await get_prompt(registry, "code_review", {})

        assert exc_info.value.error.code == types.INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_unknown_prompt(self, registry) -> None:
        """An unknown prompt should raise an MCP error."""
        with pytest.raises(McpError):
            await get_prompt(registry, "summarize", None)


class TestContentConversion:
    """Test envelope to MCP content conversion."""

    def test_structured_flattened_to_text(self) -> None:
        """Structured messages should become text blocks."""
        envelope = normalize([PromptMessage("user", "one"), PromptMessage("user", "two")])
        blocks = to_mcp_content(envelope)

        assert [b.text for b in blocks] == ["one", "two"]


class TestCreateServer:
    """Test server construction."""

    def test_registers_handlers(self, registry) -> None:
        """The server should answer every capability request type."""
        server = create_server(registry)

        for request_type in (
            types.ListToolsRequest,
            types.CallToolRequest,
            types.ListResourcesRequest,
            types.ReadResourceRequest,
            types.ListPromptsRequest,
            types.GetPromptRequest,
        ):
            assert request_type in server.request_handlers

    def test_server_name(self, registry) -> None:
        """The server should identify itself as greeting-server."""
        assert create_server(registry).name == "greeting-server"
