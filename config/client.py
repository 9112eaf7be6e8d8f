"""Defaults for the command-line client."""

from __future__ import annotations

API_BASE_URL_ENV = "TTS_API_BASE_URL"
DEFAULT_API_BASE_URL = "http://localhost:5000/api"
REQUEST_TIMEOUT = 120.0  # seconds; synthesis of long text can be slow

__all__ = ["API_BASE_URL_ENV", "DEFAULT_API_BASE_URL", "REQUEST_TIMEOUT"]
