"""Test configuration helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi import FastAPI

# Explicitly opt-in to the async plugins we rely on. Some execution environments
# disable plugin auto-discovery via ``PYTEST_DISABLE_PLUGIN_AUTOLOAD`` which
# prevents ``pytest-asyncio`` and AnyIO's plugin from being loaded even if the
# packages are installed.
pytest_plugins = ("anyio", "pytest_asyncio")

# Ensure the repository root is importable so that ``import core`` and the other
# absolute imports used throughout the codebase succeed from any directory.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.config import Settings  # noqa: E402
from main import create_app  # noqa: E402
from tests.helpers import ALLOWED_ORIGIN, FakeTTSProvider  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ibm_tts_api_key="test-api-key",
        ibm_tts_url="https://api.example.text-to-speech.watson.cloud.ibm.com/instances/test",
        allowed_origins=(ALLOWED_ORIGIN,),
    )


@pytest.fixture
def fake_provider() -> FakeTTSProvider:
    return FakeTTSProvider()


@pytest.fixture
def app(settings: Settings, fake_provider: FakeTTSProvider) -> Iterator[FastAPI]:
    application = create_app(settings, provider=fake_provider)
    try:
        yield application
    finally:
        application.dependency_overrides.clear()
