"""Image generation tool delegating to the hosted text-to-image backend."""

import logging
from collections.abc import Awaitable, Callable

from greeting_server.types import DomainFailure, MediaBlob

logger = logging.getLogger(__name__)

PNG_MIME_TYPE = "image/png"

ImageBackend = Callable[[str], Awaitable[bytes]]


async def generate_image(
    prompt: str, *, backend: ImageBackend
) -> MediaBlob | DomainFailure:
    """Generate an image for a text prompt.

    Any backend failure (network, auth, quota) is caught here and returned
    as a DomainFailure carrying the backend's message.

    Args:
        prompt: Text describing the image.
        backend: Async callable turning a prompt into image bytes.

    Returns:
        The image as PNG media, or a DomainFailure.
    """
    try:
        data = await backend(prompt)
    except Exception as e:
        logger.warning("Image backend failed: %s", e)
        return DomainFailure(
            f"Image generation error: {e}\n\n"
            "Check that the HF_TOKEN setting is correct.",
            code=getattr(e, "code", "image_generation_error"),
        )
    return MediaBlob(data=data, mime_type=PNG_MIME_TYPE)


__all__ = ["PNG_MIME_TYPE", "ImageBackend", "generate_image"]
