"""Shared fixtures for greeting_server tests."""

import pytest

from greeting_server.capabilities import CapabilityRegistry
from greeting_server.catalog import build_registry
from greeting_server.config import Settings
from greeting_server.inference import BACKEND_HTTP_ERROR, ImageGenerationError

# A minimal valid PNG header followed by filler bytes
FAKE_PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24

SETTINGS_ENV_VARS = (
    "HF_TOKEN",
    "GREETING_HF_TOKEN",
    "GREETING_IMAGE_MODEL",
    "GREETING_INFERENCE_BASE_URL",
    "GREETING_IMAGE_TIMEOUT",
    "GREETING_DEFAULT_TIMEZONE",
    "GREETING_LOG_LEVEL",
    "GREETING_HTTP_HOST",
    "GREETING_HTTP_PORT",
)


class FakeImageBackend:
    """Records prompts and returns canned bytes, or raises a canned error."""

    def __init__(self, data: bytes = FAKE_PNG, error: Exception | None = None):
        self.data = data
        self.error = error
        self.prompts: list[str] = []

    async def __call__(self, prompt: str) -> bytes:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings."""
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults and no token."""
    return Settings(_env_file=None)


@pytest.fixture
def image_backend() -> FakeImageBackend:
    return FakeImageBackend()


@pytest.fixture
def registry(settings: Settings, image_backend: FakeImageBackend) -> CapabilityRegistry:
    """The full catalog wired to a fake image backend."""
    return build_registry(settings, image_backend=image_backend)


@pytest.fixture
def failing_backend() -> FakeImageBackend:
    """Backend that fails the way the hosted API does on a bad token."""
    return FakeImageBackend(
        error=ImageGenerationError(
            "Image backend returned HTTP 401: Invalid credentials",
            code=BACKEND_HTTP_ERROR,
        )
    )
