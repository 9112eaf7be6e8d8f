"""Provider Factory - Resolution of the speech provider at startup
Providers register a builder under a short name. ``main.lifespan`` calls
:func:`get_tts_provider` once with the process settings and the shared HTTP
client, and stores the instance on ``app.state`` for request handlers.
Registration Pattern:
    # In core/providers/__init__.py
    register_tts_provider("watson", _build_watson)
    # At startup
    provider = get_tts_provider(settings, http_client)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict

import httpx

from config.tts import DEFAULT_PROVIDER
from core.exceptions import ConfigurationError
from core.providers.tts_base import BaseTTSProvider

if TYPE_CHECKING:
    from core.config import Settings

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[["Settings", httpx.AsyncClient], BaseTTSProvider]

_tts_providers: Dict[str, ProviderBuilder] = {}


def register_tts_provider(name: str, builder: ProviderBuilder) -> None:
    """Register a text-to-speech provider builder."""
    _tts_providers[name] = builder


def get_tts_provider(
    settings: "Settings",
    client: httpx.AsyncClient,
    *,
    provider_name: str = DEFAULT_PROVIDER,
) -> BaseTTSProvider:
    """Return a provider instance bound to ``settings`` and ``client``."""

    name = provider_name.strip().lower()
    if name not in _tts_providers:
        raise ConfigurationError(
            f"TTS provider {name} not registered. Available: {list(_tts_providers.keys())}",
            key=f"provider.{name}",
        )

    provider = _tts_providers[name](settings, client)
    logger.debug("Resolved tts provider instance %s for provider name %s", provider.__class__.__name__, name)
    return provider


__all__ = ["ProviderBuilder", "get_tts_provider", "register_tts_provider"]
