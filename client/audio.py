"""Local audio handles for generated speech."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Callable

import typer

from config.tts import DEFAULT_ACCEPT

logger = logging.getLogger(__name__)


class AudioClip:
    """Generated audio kept in a temporary file so players can open it.

    Call :meth:`release` once the clip is superseded; the file is removed.
    """

    def __init__(self, data: bytes, *, content_type: str = DEFAULT_ACCEPT, suffix: str = ".mp3") -> None:
        self.content_type = content_type
        self.size = len(data)
        handle = tempfile.NamedTemporaryFile(prefix="tts-", suffix=suffix, delete=False)
        try:
            handle.write(data)
        finally:
            handle.close()
        self._path: Path | None = Path(handle.name)

    @property
    def released(self) -> bool:
        return self._path is None

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("Audio clip has been released")
        return self._path

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def save(self, destination: Path) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.path, destination)
        return destination

    def release(self) -> None:
        if self._path is None:
            return
        self._path.unlink(missing_ok=True)
        self._path = None


AudioPlayer = Callable[[AudioClip], None]


def launch_player(clip: AudioClip) -> None:
    """Open the clip with the system's default audio application."""

    typer.launch(str(clip.path))


def silent_player(clip: AudioClip) -> None:
    logger.debug("Playback disabled; clip kept at %s", clip.path)


__all__ = ["AudioClip", "AudioPlayer", "launch_player", "silent_player"]
