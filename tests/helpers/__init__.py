"""Test doubles shared across the suite."""

from __future__ import annotations

from typing import AsyncIterator, Iterable, List, Sequence

import httpx
from fastapi import FastAPI

from core.exceptions import ProviderError
from core.providers.tts_base import (
    BaseTTSProvider,
    ProviderVoice,
    SpeechStream,
    SynthesisRequest,
)


ALLOWED_ORIGIN = "https://texttospeech3.netlify.app"

SAMPLE_VOICES: List[ProviderVoice] = [
    ProviderVoice(
        name="en-US_AllisonV3Voice",
        description="Allison: American English female voice.",
        gender="female",
        language="en-US",
        customizable=True,
    ),
    ProviderVoice(
        name="de-DE_DieterV3Voice",
        description="Dieter: German (Deutsch) male voice.",
        gender="male",
        language="de-DE",
    ),
    ProviderVoice(name="xx-XX_MysteryVoice", description="Mystery voice"),
]


class FakeTTSProvider(BaseTTSProvider):
    """Provider double returning canned catalogs, streams or errors."""

    name = "fake"

    def __init__(
        self,
        *,
        voices: Sequence[ProviderVoice] = SAMPLE_VOICES,
        chunks: Iterable[bytes] = (b"ID3\x04", b"\xff\xfb\x90", b"audio-tail"),
        voices_error: Exception | None = None,
        synthesize_error: Exception | None = None,
    ) -> None:
        self.voices = list(voices)
        self.chunks = list(chunks)
        self.voices_error = voices_error
        self.synthesize_error = synthesize_error
        self.list_calls = 0
        self.synth_calls: List[SynthesisRequest] = []
        self.streams: List[SpeechStream] = []

    async def list_voices(self) -> List[ProviderVoice]:
        self.list_calls += 1
        if self.voices_error is not None:
            raise self.voices_error
        return list(self.voices)

    async def synthesize(self, request: SynthesisRequest) -> SpeechStream:
        self.synth_calls.append(request)
        if self.synthesize_error is not None:
            raise self.synthesize_error

        async def _chunks() -> AsyncIterator[bytes]:
            for chunk in self.chunks:
                yield chunk

        stream = SpeechStream(_chunks())
        self.streams.append(stream)
        return stream

    @property
    def audio(self) -> bytes:
        return b"".join(self.chunks)


def provider_failure(message: str = "Unauthorized: invalid API key") -> ProviderError:
    return ProviderError(message, provider="fake", status_code=401)


def asgi_client(app: FastAPI) -> httpx.AsyncClient:
    """Return an HTTP client wired straight into ``app``."""

    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


__all__ = ["ALLOWED_ORIGIN", "FakeTTSProvider", "SAMPLE_VOICES", "asgi_client", "provider_failure"]
