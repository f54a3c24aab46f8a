"""Entry point for ``python -m greeting_server``."""

from greeting_server.cli import app

app(prog_name="greeting-server")
