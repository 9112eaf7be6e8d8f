"""Cross-origin policy defaults."""

from __future__ import annotations

from typing import List

ALLOWED_ORIGINS_ENV = "TTS_ALLOWED_ORIGINS"

# Deployed single-page frontend
DEFAULT_ALLOWED_ORIGINS: List[str] = ["https://texttospeech3.netlify.app"]
ALLOWED_METHODS: List[str] = ["GET", "POST"]

__all__ = ["ALLOWED_ORIGINS_ENV", "DEFAULT_ALLOWED_ORIGINS", "ALLOWED_METHODS"]
