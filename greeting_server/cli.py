"""Thin CLI wrapper for greeting_server.

This module provides the command-line interface using Typer.
All capability logic is delegated to the registry.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from greeting_server import __version__
from greeting_server.capabilities import (
    BinaryMediaContent,
    ResponseEnvelope,
    StructuredContent,
    TextContent,
)
from greeting_server.config import get_settings, print_settings_json
from greeting_server.types import CapabilityKind

app = typer.Typer(
    name="greeting-server",
    help="Greeting Server - discover and invoke greetings, calculator, time, "
    "image and code review capabilities",
    no_args_is_help=True,
)
console = Console()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging on stderr.

    stdout is reserved for command output and the MCP stdio transport.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"greeting-server version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Greeting Server - discover and invoke capabilities."""
    configure_logging(get_settings().log_level)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print_json(print_settings_json(settings))
    else:
        token_display = "(set)" if settings.hf_token else "(not set)"
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Image backend:[/bold]")
        console.print(f"  HF token:            {token_display}")
        console.print(f"  Model:               {settings.image_model}")
        console.print(f"  Inference URL:       {settings.inference_base_url}")
        console.print(f"  Timeout (seconds):   {settings.image_timeout}")
        console.print()
        console.print("[bold]Capabilities:[/bold]")
        console.print(f"  Default timezone:    {settings.default_timezone}")
        console.print()
        console.print("[bold]Operational:[/bold]")
        console.print(f"  Log level:           {settings.log_level}")
        console.print(f"  HTTP bind:           {settings.http_host}:{settings.http_port}")


@app.command()
def capabilities(
    kind: Annotated[
        CapabilityKind | None,
        typer.Option("--kind", "-k", help="Filter by kind (tool/resource/prompt)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List available capabilities."""
    from greeting_server.catalog import build_registry

    registry = build_registry()
    descriptors = registry.descriptors(kind)

    if json_output:
        console.print_json(data=[d.to_dict() for d in descriptors])
        return

    console.print(f"[bold]Found {len(descriptors)} capability(ies):[/bold]")
    console.print()
    for d in descriptors:
        console.print(f"  [green]{d.name}[/green] ({d.kind.value})")
        console.print(f"    {d.description}", markup=False)
        if d.uri:
            console.print(f"    URI: {d.uri}")
        for param, spec in d.input_shape.items():
            flag = "required" if spec.required else "optional"
            allowed = f" one of: {', '.join(spec.enum)}" if spec.enum else ""
            console.print(
                f"    - {param}: {spec.type.value}, {flag}{allowed}", markup=False
            )
        console.print()


def parse_arg(pair: str) -> tuple[str, Any]:
    """Parse a KEY=VALUE option.

    The value is decoded as JSON when possible (numbers, booleans, quoted
    strings) and used verbatim otherwise.

    Raises:
        typer.BadParameter: If the option is not of the form KEY=VALUE.
    """
    key, sep, raw = pair.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"Expected KEY=VALUE, got '{pair}'")
    try:
        value = json.loads(raw)
    except ValueError:
        value = raw
    return key, value


def _print_envelope(envelope: ResponseEnvelope, output: Path | None) -> None:
    for item in envelope.content:
        if isinstance(item, TextContent):
            style = "red" if envelope.is_error else None
            console.print(item.text, style=style, markup=False, highlight=False)
        elif isinstance(item, BinaryMediaContent):
            data = item.decode()
            console.print(f"[binary media: {item.mime_type}, {len(data)} bytes]", markup=False)
            if output is not None:
                output.write_bytes(data)
                console.print(f"[green]Saved to {output}[/green]")
        elif isinstance(item, StructuredContent):
            for message in item.messages:
                console.print(f"[bold]{message.role}:[/bold]")
                console.print(message.text, markup=False, highlight=False)


@app.command()
def call(
    kind: Annotated[
        CapabilityKind, typer.Argument(help="Capability kind (tool/resource/prompt)")
    ],
    name: Annotated[str, typer.Argument(help="Capability name")],
    arg: Annotated[
        list[str] | None,
        typer.Option("--arg", "-a", help="Argument as KEY=VALUE (can be repeated)"),
    ] = None,
    args_json: Annotated[
        str | None,
        typer.Option("--args-json", help="Arguments as a JSON object"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write binary media to this file"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output the raw envelope as JSON"),
    ] = False,
) -> None:
    """Invoke a capability and print its response.

    Exits with code 1 when the response is an error.
    """
    from greeting_server.catalog import build_registry

    args: dict[str, Any] = {}
    if args_json:
        try:
            loaded = json.loads(args_json)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid JSON: {e}") from None
        if not isinstance(loaded, dict):
            raise typer.BadParameter("--args-json must be a JSON object")
        args.update(loaded)
    for pair in arg or []:
        key, value = parse_arg(pair)
        args[key] = value

    registry = build_registry()
    envelope = asyncio.run(registry.dispatch(kind, name, args))

    if json_output:
        console.print_json(envelope.model_dump_json())
    else:
        _print_envelope(envelope, output)

    if envelope.is_error:
        raise typer.Exit(code=1)


serve_app = typer.Typer(help="Run a server frontend")
app.add_typer(serve_app, name="serve")


@serve_app.command("mcp")
def serve_mcp() -> None:
    """Serve capabilities over MCP stdio."""
    from mcp_server import run_stdio

    asyncio.run(run_stdio())


@serve_app.command("http")
def serve_http(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Bind address (default from settings)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Bind port (default from settings)"),
    ] = None,
) -> None:
    """Serve capabilities over HTTP."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "web.app:app",
        host=host or settings.http_host,
        port=port or settings.http_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
