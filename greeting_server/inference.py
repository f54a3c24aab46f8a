"""Hosted text-to-image backend client.

This module handles:
- Building the inference endpoint URL for a model
- Authenticated POST of a prompt to the hosted inference API
- Mapping transport and HTTP failures to ImageGenerationError codes

The token is only checked when an image is requested, so the server can
start without one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from greeting_server.config import DEFAULT_IMAGE_MODEL, DEFAULT_INFERENCE_BASE_URL

if TYPE_CHECKING:
    from greeting_server.config import Settings

logger = logging.getLogger(__name__)

# Timeout for image generation requests (seconds)
DEFAULT_TIMEOUT = 120.0

# Maximum length of a backend error body quoted back to the caller
MAX_ERROR_DETAIL = 200

MISSING_CREDENTIAL = "missing_credential"
BACKEND_HTTP_ERROR = "backend_http_error"
BACKEND_UNAVAILABLE = "backend_unavailable"
EMPTY_IMAGE = "empty_image"


class ImageGenerationError(Exception):
    """Raised when the image backend cannot produce an image."""

    def __init__(self, message: str, code: str = "image_generation_error") -> None:
        """Initialize ImageGenerationError.

        Args:
            message: Error description.
            code: Error code for structured error handling.
        """
        super().__init__(message)
        self.code = code


def build_endpoint_url(model: str, base_url: str = DEFAULT_INFERENCE_BASE_URL) -> str:
    """Build the inference URL for a model.

    Args:
        model: Model identifier (e.g., 'black-forest-labs/FLUX.1-schnell').
        base_url: Base URL of the inference API.

    Returns:
        Full endpoint URL.
    """
    if not model:
        raise ValueError("model must be provided")
    return f"{base_url.rstrip('/')}/{model.strip('/')}"


def _error_detail(response: httpx.Response) -> str:
    """Extract a short error description from a backend response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        detail = str(payload["error"])
    else:
        detail = response.text.strip() or response.reason_phrase
    return detail[:MAX_ERROR_DETAIL]


class TextToImageClient:
    """Async client for the hosted text-to-image API.

    Instances are callable: ``await client(prompt)`` returns image bytes.
    """

    def __init__(
        self,
        token: str | None,
        model: str = DEFAULT_IMAGE_MODEL,
        base_url: str = DEFAULT_INFERENCE_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._token = token
        self.model = model
        self.endpoint = build_endpoint_url(model, base_url)
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> TextToImageClient:
        """Create a client from application settings."""
        token = settings.hf_token.get_secret_value() if settings.hf_token else None
        return cls(
            token=token,
            model=settings.image_model,
            base_url=settings.inference_base_url,
            timeout=float(settings.image_timeout),
        )

    async def generate(self, prompt: str) -> bytes:
        """Generate an image for a prompt.

        Args:
            prompt: Text describing the image.

        Returns:
            Raw image bytes.

        Raises:
            ImageGenerationError: If no token is configured, the backend is
                unreachable, answers with an HTTP error, or returns no data.
        """
        if not self._token:
            raise ImageGenerationError(
                "No Hugging Face token configured (HF_TOKEN)",
                code=MISSING_CREDENTIAL,
            )

        logger.info("Requesting image from %s", self.endpoint)
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "image/png",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.endpoint, headers=headers, json={"inputs": prompt}
                )
        except httpx.HTTPError as e:
            raise ImageGenerationError(
                f"Image backend unreachable: {e}", code=BACKEND_UNAVAILABLE
            ) from e

        if response.is_error:
            raise ImageGenerationError(
                f"Image backend returned HTTP {response.status_code}: "
                f"{_error_detail(response)}",
                code=BACKEND_HTTP_ERROR,
            )

        if not response.content:
            raise ImageGenerationError(
                "Image backend returned an empty image", code=EMPTY_IMAGE
            )

        logger.debug("Received %d image bytes", len(response.content))
        return response.content

    async def __call__(self, prompt: str) -> bytes:
        return await self.generate(prompt)


__all__ = [
    "BACKEND_HTTP_ERROR",
    "BACKEND_UNAVAILABLE",
    "DEFAULT_TIMEOUT",
    "EMPTY_IMAGE",
    "MISSING_CREDENTIAL",
    "ImageGenerationError",
    "TextToImageClient",
    "build_endpoint_url",
]
