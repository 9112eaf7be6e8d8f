"""Base classes and schemas for text-to-speech providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, List, Optional

from config.tts import DEFAULT_ACCEPT


@dataclass(frozen=True, slots=True)
class ProviderVoice:
    """Voice entry exactly as the provider reports it."""

    name: str
    description: str
    gender: str | None = None
    language: str | None = None
    customizable: bool | None = None


@dataclass(frozen=True, slots=True)
class SynthesisRequest:
    """Container describing a single synthesis call."""

    text: str
    voice: str
    accept: str = DEFAULT_ACCEPT


class SpeechStream:
    """Finite, single-use stream of audio bytes produced by a provider.

    Iterating yields chunks in the order the provider sent them. The
    underlying connection is released once iteration ends or :meth:`aclose`
    is called, whichever happens first.
    """

    def __init__(
        self,
        chunks: AsyncIterator[bytes],
        *,
        media_type: str = DEFAULT_ACCEPT,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        self._chunks = chunks
        self.media_type = media_type
        self._on_close = on_close
        self._consumed = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aiter__(self) -> AsyncIterator[bytes]:
        if self._consumed:
            raise RuntimeError("SpeechStream can only be consumed once")
        self._consumed = True
        try:
            async for chunk in self._chunks:
                if chunk:
                    yield chunk
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            await self._on_close()


class BaseTTSProvider(ABC):
    """Two-operation interface the proxy needs from a speech provider."""

    name: str = "tts"

    @abstractmethod
    async def list_voices(self) -> List[ProviderVoice]:
        """Return the provider's voice catalog in provider order."""

    @abstractmethod
    async def synthesize(self, request: SynthesisRequest) -> SpeechStream:
        """Start synthesis and return the audio body as a stream.

        Implementations must surface provider-side failures (authentication,
        unknown voice, quota) by raising before returning, so callers can
        still answer with an error status.
        """

    async def aclose(self) -> None:  # pragma: no cover - default impl
        """Release any resources held by the provider."""


__all__ = ["ProviderVoice", "SynthesisRequest", "SpeechStream", "BaseTTSProvider"]
