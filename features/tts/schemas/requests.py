"""Pydantic request models for the TTS feature."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateSpeechRequest(BaseModel):
    """Body of ``POST /api/generate-speech``.

    ``text`` is optional here so that a missing value is reported with the
    proxy's own 400 message rather than a framework validation envelope.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: Optional[str] = Field(default=None, description="Text to synthesise into speech")
    voice_id: Optional[str] = Field(
        default=None,
        description="Provider voice name; the default voice is used when omitted or empty",
    )


__all__ = ["GenerateSpeechRequest"]
