"""Orchestration for the two proxy operations."""

from __future__ import annotations

import json
import logging
from typing import List

from pydantic import ValidationError as PydanticValidationError

from config.tts import DEFAULT_ACCEPT, DEFAULT_VOICE
from core.exceptions import ValidationError
from core.providers.tts_base import BaseTTSProvider, SpeechStream, SynthesisRequest

from features.tts.schemas.requests import GenerateSpeechRequest
from features.tts.schemas.responses import VoiceDescriptor

logger = logging.getLogger(__name__)

TEXT_REQUIRED_MESSAGE = "Text is required for speech generation."


def parse_generate_request(body: bytes) -> GenerateSpeechRequest:
    """Decode the raw request body, mapping any malformed input to a missing text."""

    if not body:
        raise ValidationError(TEXT_REQUIRED_MESSAGE, field="text")
    try:
        payload = json.loads(body)
        return GenerateSpeechRequest.model_validate(payload)
    except (ValueError, PydanticValidationError) as exc:
        logger.warning("Rejected malformed generate-speech body: %s", exc)
        raise ValidationError(TEXT_REQUIRED_MESSAGE, field="text") from exc


class TTSService:
    """Stateless bridge between HTTP handlers and the speech provider."""

    def __init__(self, provider: BaseTTSProvider, *, default_voice: str = DEFAULT_VOICE) -> None:
        self._provider = provider
        self._default_voice = default_voice

    async def list_voices(self) -> List[VoiceDescriptor]:
        voices = await self._provider.list_voices()
        return [VoiceDescriptor.from_provider(voice) for voice in voices]

    def build_synthesis_request(self, request: GenerateSpeechRequest) -> SynthesisRequest:
        if not request.text:
            raise ValidationError(TEXT_REQUIRED_MESSAGE, field="text")
        voice = request.voice_id or self._default_voice
        return SynthesisRequest(text=request.text, voice=voice, accept=DEFAULT_ACCEPT)

    async def generate_speech(self, request: GenerateSpeechRequest) -> SpeechStream:
        """Validate ``request`` and open the provider's audio stream.

        Validation happens before the provider is contacted.
        """

        synthesis = self.build_synthesis_request(request)
        logger.info(
            "Generating speech via %s (voice=%s chars=%d)",
            getattr(self._provider, "name", "tts"),
            synthesis.voice,
            len(synthesis.text),
        )
        return await self._provider.synthesize(synthesis)


__all__ = ["TEXT_REQUIRED_MESSAGE", "TTSService", "parse_generate_request"]
