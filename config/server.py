"""HTTP server defaults."""

from __future__ import annotations

APP_TITLE = "Watson TTS Proxy"
APP_DESCRIPTION = "Thin proxy between the browser client and IBM Watson Text to Speech"
APP_VERSION = "1.0.0"

API_PREFIX = "/api"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000

__all__ = [
    "APP_TITLE",
    "APP_DESCRIPTION",
    "APP_VERSION",
    "API_PREFIX",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
]
