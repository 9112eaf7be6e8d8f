"""Dependency helpers for the TTS feature."""

from __future__ import annotations

from fastapi import Depends, Request

from core.config import Settings
from core.exceptions import ConfigurationError
from core.providers.tts_base import BaseTTSProvider

from .service import TTSService


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""

    return request.app.state.settings


def get_tts_provider(request: Request) -> BaseTTSProvider:
    """Return the provider created during application startup."""

    provider = getattr(request.app.state, "tts_provider", None)
    if provider is None:
        raise ConfigurationError("TTS provider is not initialised", key="tts_provider")
    return provider


def get_tts_service(
    provider: BaseTTSProvider = Depends(get_tts_provider),
    settings: Settings = Depends(get_settings),
) -> TTSService:
    """Return a :class:`TTSService` bound to the process provider."""

    return TTSService(provider, default_voice=settings.default_voice)


__all__ = ["get_settings", "get_tts_provider", "get_tts_service"]
