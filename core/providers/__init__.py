"""Provider Registry - Import-Time Registration of the speech provider
Importing this package registers every provider builder so that
``core.providers.factory.get_tts_provider`` can resolve them by name.
See Also:
    - core/providers/factory.py: registry and resolver
    - core/providers/tts_base.py: provider interface
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from core.providers import factory  # re-export for convenience
from core.providers.factory import get_tts_provider, register_tts_provider
from core.providers.tts.watson import WatsonTTSProvider
from core.providers.tts_base import BaseTTSProvider, ProviderVoice, SpeechStream, SynthesisRequest

if TYPE_CHECKING:
    from core.config import Settings

logger = logging.getLogger(__name__)


def _build_watson(settings: "Settings", client: httpx.AsyncClient) -> WatsonTTSProvider:
    return WatsonTTSProvider(
        api_key=settings.ibm_tts_api_key,
        service_url=settings.service_url,
        client=client,
    )


register_tts_provider("watson", _build_watson)

logger.debug("Registered TTS providers: watson")

__all__ = [
    "BaseTTSProvider",
    "ProviderVoice",
    "SpeechStream",
    "SynthesisRequest",
    "WatsonTTSProvider",
    "factory",
    "get_tts_provider",
    "register_tts_provider",
]
