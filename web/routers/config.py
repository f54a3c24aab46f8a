"""Configuration endpoints."""

from typing import Any

from fastapi import APIRouter

from greeting_server.config import get_settings

router = APIRouter()


@router.get("")
def get_config() -> dict[str, Any]:
    """Get effective configuration.

    The image backend token is reported as set or not, never its value.

    Returns:
        Current configuration as JSON.
    """
    settings = get_settings()
    return {
        "hf_token_set": settings.hf_token is not None,
        "image_model": settings.image_model,
        "inference_base_url": settings.inference_base_url,
        "image_timeout": settings.image_timeout,
        "default_timezone": settings.default_timezone,
        "log_level": settings.log_level,
        "http_host": settings.http_host,
        "http_port": settings.http_port,
    }
