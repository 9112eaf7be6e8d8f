"""Text-to-speech configuration defaults."""

from __future__ import annotations

DEFAULT_PROVIDER = "watson"
DEFAULT_VOICE = "en-US_AllisonV3Voice"
DEFAULT_ACCEPT = "audio/mpeg"

# Placeholder for voice fields the provider omits
MISSING_FIELD = "N/A"

RESPONSE_FILENAME = "speech.mp3"
DOWNLOAD_FILENAME = "generated_speech.mp3"

__all__ = [
    "DEFAULT_PROVIDER",
    "DEFAULT_VOICE",
    "DEFAULT_ACCEPT",
    "MISSING_FIELD",
    "RESPONSE_FILENAME",
    "DOWNLOAD_FILENAME",
]
