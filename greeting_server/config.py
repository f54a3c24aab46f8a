"""Configuration settings for greeting_server.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IMAGE_MODEL = "black-forest-labs/FLUX.1-schnell"
DEFAULT_INFERENCE_BASE_URL = "https://router.huggingface.co/hf-inference/models"
DEFAULT_TIMEZONE = "Asia/Seoul"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the GREETING_ prefix.
    The image backend token is also accepted as plain HF_TOKEN.
    """

    model_config = SettingsConfigDict(
        env_prefix="GREETING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Image backend
    hf_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("GREETING_HF_TOKEN", "HF_TOKEN"),
        description="Hugging Face API token for image generation",
    )
    image_model: str = Field(
        default=DEFAULT_IMAGE_MODEL,
        description="Text-to-image model identifier",
    )
    inference_base_url: str = Field(
        default=DEFAULT_INFERENCE_BASE_URL,
        description="Base URL of the hosted inference API",
    )
    image_timeout: int = Field(
        default=120,
        ge=1,
        description="Timeout for image generation requests (seconds)",
    )

    # Capabilities
    default_timezone: str = Field(
        default=DEFAULT_TIMEZONE,
        description="IANA zone used by current-time when none is given",
    )

    # Operational
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    http_host: str = Field(
        default="127.0.0.1",
        description="Bind address for the HTTP frontend",
    )
    http_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Bind port for the HTTP frontend",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    The token is masked by its SecretStr type.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = [
    "DEFAULT_IMAGE_MODEL",
    "DEFAULT_INFERENCE_BASE_URL",
    "DEFAULT_TIMEZONE",
    "Settings",
    "get_settings",
    "print_settings_json",
]
