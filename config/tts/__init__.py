"""Text-to-speech configuration."""

from __future__ import annotations

from .defaults import (
    DEFAULT_ACCEPT,
    DEFAULT_PROVIDER,
    DEFAULT_VOICE,
    DOWNLOAD_FILENAME,
    MISSING_FIELD,
    RESPONSE_FILENAME,
)
from . import providers

__all__ = [
    "DEFAULT_ACCEPT",
    "DEFAULT_PROVIDER",
    "DEFAULT_VOICE",
    "DOWNLOAD_FILENAME",
    "MISSING_FIELD",
    "RESPONSE_FILENAME",
    "providers",
]
