"""Process settings for the TTS proxy.

Settings are read from the environment exactly once, by :func:`load_settings`,
when the process starts. The resulting frozen :class:`Settings` value is handed
to ``main.create_app`` and reaches request handlers through
``features.tts.dependencies`` rather than through module globals.

Constants (env var names, defaults) live in the ``config/`` package:
- Provider credentials and endpoints: config.tts.providers.watson
- Voice and filename defaults: config.tts
- Cross-origin allow-list: config.cors
- Bind address and app metadata: config.server
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple

from config.api_keys import load_api_keys
from config.cors import ALLOWED_METHODS, ALLOWED_ORIGINS_ENV, DEFAULT_ALLOWED_ORIGINS
from config.environment import get_node_env
from config.server import DEFAULT_HOST, DEFAULT_PORT
from config.tts import DEFAULT_VOICE
from config.tts.providers import watson as watson_config
from core.exceptions import ConfigurationError
from core.utils.env import get_bool_env, get_env

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Immutable configuration value constructed once at process start."""

    ibm_tts_api_key: str
    ibm_tts_url: str
    allowed_origins: Tuple[str, ...] = tuple(DEFAULT_ALLOWED_ORIGINS)
    allowed_methods: Tuple[str, ...] = tuple(ALLOWED_METHODS)
    default_voice: str = DEFAULT_VOICE
    verify_ssl: bool = True
    provider_timeout: float = watson_config.DEFAULT_TIMEOUT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    environment: str = field(default_factory=get_node_env)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "allowed_origins", tuple(normalise_origin(item) for item in self.allowed_origins)
        )
        if not self.ibm_tts_api_key:
            raise ConfigurationError(
                "Missing IBM credentials: IBM_TTS_API_KEY is not set",
                key=watson_config.API_KEY_ENV,
            )
        if not self.ibm_tts_url:
            raise ConfigurationError(
                "Missing IBM credentials: IBM_TTS_URL is not set",
                key=watson_config.SERVICE_URL_ENV,
            )

    @property
    def service_url(self) -> str:
        return self.ibm_tts_url.rstrip("/")


def normalise_origin(origin: str) -> str:
    """Return ``origin`` in the form browsers send: lowercase, no trailing slash."""

    return origin.strip().rstrip("/").lower()


def _parse_origins(raw: str | None) -> Tuple[str, ...]:
    if not raw:
        return tuple(DEFAULT_ALLOWED_ORIGINS)
    origins = tuple(normalise_origin(item) for item in raw.split(",") if item.strip())
    return origins or tuple(DEFAULT_ALLOWED_ORIGINS)


def _parse_port(raw: str | None) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid PORT value: {raw}", key="PORT") from exc


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return watson_config.DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid {watson_config.TIMEOUT_ENV} value: {raw}", key=watson_config.TIMEOUT_ENV
        ) from exc
    if value <= 0:
        raise ConfigurationError(
            f"{watson_config.TIMEOUT_ENV} must be positive", key=watson_config.TIMEOUT_ENV
        )
    return value


def load_settings() -> Settings:
    """Build :class:`Settings` from the environment.

    Raises:
        ConfigurationError: when the provider API key or service URL is
            missing, or a numeric setting cannot be parsed. Callers must treat
            this as fatal and refuse to serve.
    """

    keys = load_api_keys()
    logger.info(
        "IBM_TTS_API_KEY: %s", "Loaded" if keys["ibm_tts_api_key"] else "Not Found"
    )
    logger.info("IBM_TTS_URL: %s", keys["ibm_tts_url"] or "Not Found")

    return Settings(
        ibm_tts_api_key=keys["ibm_tts_api_key"],
        ibm_tts_url=keys["ibm_tts_url"],
        allowed_origins=_parse_origins(get_env(ALLOWED_ORIGINS_ENV)),
        verify_ssl=not get_bool_env(watson_config.DISABLE_SSL_VERIFICATION_ENV),
        provider_timeout=_parse_timeout(get_env(watson_config.TIMEOUT_ENV)),
        host=get_env("HOST", default=DEFAULT_HOST) or DEFAULT_HOST,
        port=_parse_port(get_env("PORT")),
    )


__all__ = ["Settings", "load_settings", "normalise_origin"]
