"""Client-side session state driving the proxy.

Mirrors a single page session: entered text, the voice catalog, the
selected voice, one generation cycle at a time and the last generated clip.
Nothing survives the session object.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from config.tts import DOWNLOAD_FILENAME
from features.tts.schemas.responses import VoiceDescriptor

from .api import ProxyClient, ProxyRequestError
from .audio import AudioClip, AudioPlayer, silent_player
from .state import GenerationInProgressError, GenerationState, GenerationStateMachine

logger = logging.getLogger(__name__)

VOICES_ERROR_PREFIX = "Failed to fetch voices"
GENERATE_ERROR_PREFIX = "Error generating speech"
NO_AUDIO_MESSAGE = "No audio to download. Please generate speech first!"


class GenerationBlockedError(ValueError):
    """Raised when generation is requested without any text."""


class NoAudioError(RuntimeError):
    """Raised when a download is requested before any successful generation."""

    def __init__(self, message: str = NO_AUDIO_MESSAGE):
        self.message = message
        super().__init__(message)


def _describe_failure(exc: ProxyRequestError, prefix: str) -> str:
    if exc.server_message:
        return exc.message
    return f"{prefix}: {exc.message}"


class ClientSession:
    def __init__(self, api: ProxyClient, *, player: AudioPlayer | None = None) -> None:
        self._api = api
        self._player = player or silent_player
        self._machine = GenerationStateMachine()
        self.text = ""
        self._voices: Tuple[VoiceDescriptor, ...] = ()
        self._selected_voice_id: Optional[str] = None
        self.error: Optional[str] = None
        self._audio: Optional[AudioClip] = None

    @property
    def voices(self) -> Tuple[VoiceDescriptor, ...]:
        return self._voices

    @property
    def selected_voice_id(self) -> Optional[str]:
        return self._selected_voice_id

    @property
    def audio(self) -> Optional[AudioClip]:
        return self._audio

    @property
    def state(self) -> GenerationState:
        return self._machine.state

    @property
    def loading(self) -> bool:
        return self._machine.is_loading

    @property
    def can_generate(self) -> bool:
        return bool(self.text) and not self.loading

    async def load_voices(self) -> None:
        """Fetch the catalog and select its first voice.

        On failure the catalog stays empty, no voice is selected and
        :attr:`error` carries the reason.
        """

        try:
            voices = await self._api.fetch_voices()
        except ProxyRequestError as exc:
            self.error = _describe_failure(exc, VOICES_ERROR_PREFIX)
            logger.error("Error fetching voices: %s", exc)
            return

        self._voices = tuple(voices)
        if self._voices:
            self._selected_voice_id = self._voices[0].voice_id
        logger.info("Loaded %d voices", len(self._voices))

    def select_voice(self, voice_id: str) -> None:
        if voice_id not in {voice.voice_id for voice in self._voices}:
            raise ValueError(f"Unknown voice: {voice_id}")
        self._selected_voice_id = voice_id

    async def generate_speech(self) -> GenerationState:
        """Run one generation cycle and return the terminal state reached.

        The loading flag is raised and the previous error cleared before the
        first suspension point. Failures keep the previous clip.
        """

        if not self.text:
            raise GenerationBlockedError("Enter some text before generating speech")
        if self.loading:
            raise GenerationInProgressError()

        self._machine.start()
        self.error = None
        try:
            data = await self._api.generate_speech(self.text, self._selected_voice_id)
        except ProxyRequestError as exc:
            self.error = _describe_failure(exc, GENERATE_ERROR_PREFIX)
            logger.error("Error generating speech: %s", exc)
            self._machine.fail()
            return self.state
        except BaseException:
            self.error = f"{GENERATE_ERROR_PREFIX}: request aborted"
            self._machine.fail()
            raise

        try:
            clip = AudioClip(data)
        except OSError as exc:
            self.error = f"{GENERATE_ERROR_PREFIX}: {exc}"
            logger.error("Could not store generated audio: %s", exc)
            self._machine.fail()
            return self.state

        self._replace_audio(clip)
        self._machine.succeed()
        self._play(clip)
        return self.state

    def download(self, directory: Path) -> Path:
        """Save the active clip as ``generated_speech.mp3`` inside ``directory``."""

        if self._audio is None or self._audio.released:
            raise NoAudioError()
        target = self._audio.save(Path(directory) / DOWNLOAD_FILENAME)
        logger.info("Saved generated speech to %s", target)
        return target

    def close(self) -> None:
        if self._audio is not None:
            self._audio.release()
            self._audio = None

    def _replace_audio(self, clip: AudioClip) -> None:
        previous, self._audio = self._audio, clip
        if previous is not None:
            previous.release()

    def _play(self, clip: AudioClip) -> None:
        try:
            self._player(clip)
        except OSError as exc:
            logger.warning("Could not start playback: %s", exc)


__all__ = [
    "ClientSession",
    "GenerationBlockedError",
    "NoAudioError",
    "NO_AUDIO_MESSAGE",
]
