"""Capability handlers.

Each handler receives validated keyword arguments and returns a plain
domain value (text, a JSON document, media or prompt messages), or a
DomainFailure for expected failures.
"""

from greeting_server.handlers.calculator import calculate
from greeting_server.handlers.clock import current_time
from greeting_server.handlers.code_review import code_review
from greeting_server.handlers.greeting import GREETINGS, SUPPORTED_LANGUAGES, greet
from greeting_server.handlers.image import PNG_MIME_TYPE, generate_image
from greeting_server.handlers.server_info import describe_server

__all__ = [
    "GREETINGS",
    "PNG_MIME_TYPE",
    "SUPPORTED_LANGUAGES",
    "calculate",
    "code_review",
    "current_time",
    "describe_server",
    "generate_image",
    "greet",
]
