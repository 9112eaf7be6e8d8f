"""Response payloads for the TTS feature."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from config.tts import MISSING_FIELD
from core.providers.tts_base import ProviderVoice


class VoiceDescriptor(BaseModel):
    """Normalised view of a provider voice as served to the client."""

    model_config = ConfigDict(frozen=True)

    voice_id: str = Field(..., description="Provider voice name, used as the selection key")
    name: str = Field(..., description="Human readable voice description")
    gender: str = Field(default=MISSING_FIELD, description="Voice gender or N/A")
    language: str = Field(default=MISSING_FIELD, description="Locale tag or N/A")
    customizable: bool = Field(default=False, description="Whether the voice supports customization")

    @classmethod
    def from_provider(cls, voice: ProviderVoice) -> "VoiceDescriptor":
        return cls(
            voice_id=voice.name,
            name=voice.description,
            gender=voice.gender or MISSING_FIELD,
            language=voice.language or MISSING_FIELD,
            customizable=bool(voice.customizable),
        )


class ErrorResponse(BaseModel):
    """Flat error body returned on every failure."""

    error: str = Field(..., description="Human readable failure message")


__all__ = ["ErrorResponse", "VoiceDescriptor"]
