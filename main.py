from __future__ import annotations

"""Watson TTS Proxy - Main Application Entry Point
This is the FastAPI application factory for the text-to-speech proxy that sits
between the browser client and IBM Watson Text to Speech.
Architecture Overview:
    - Stateless request handling; one outbound provider call per request
    - Settings loaded once at process start and passed into create_app()
    - Provider registry resolves the Watson adapter (see core/providers/)
    - Origin allow-list guard plus CORS for browser callers
Entry Points:
    - /health - Health check endpoint
    - /api/voices - Voice catalog
    - /api/generate-speech - Streaming MPEG synthesis
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from config.server import APP_DESCRIPTION, APP_TITLE, APP_VERSION
from core.config import Settings, load_settings
from core.exceptions import ConfigurationError
from core.http.errors import format_configuration_error
from core.http.origins import configure_cross_origin
from core.logging import setup_logging
from core.observability import register_http_request_logging
from core.providers import get_tts_provider
from core.providers.tts_base import BaseTTSProvider
from features.tts import router as tts_router

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings, provider: BaseTTSProvider | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Own the shared HTTP client and provider for the process lifetime."""

        http_client: httpx.AsyncClient | None = None
        if provider is None:
            http_client = httpx.AsyncClient(
                timeout=settings.provider_timeout,
                verify=settings.verify_ssl,
            )
            app.state.tts_provider = get_tts_provider(settings, http_client)
        else:
            app.state.tts_provider = provider
        logger.info(
            "TTS provider ready: %s", getattr(app.state.tts_provider, "name", "tts")
        )
        try:
            yield
        finally:
            logger.info("Application shutting down...")
            await app.state.tts_provider.aclose()
            if http_client is not None:
                await http_client.aclose()
            logger.info("Shutdown complete")

    return lifespan


def create_app(
    settings: Settings | None = None,
    *,
    provider: BaseTTSProvider | None = None,
) -> FastAPI:
    """Application factory returning a configured FastAPI instance.

    ``settings`` defaults to :func:`core.config.load_settings`, which raises
    :class:`ConfigurationError` when credentials are missing. ``provider``
    replaces the Watson adapter, e.g. with a fake in tests.
    """

    settings = settings or load_settings()

    app = FastAPI(
        title=APP_TITLE,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        lifespan=_build_lifespan(settings, provider),
    )
    app.state.settings = settings
    if provider is not None:
        app.state.tts_provider = provider

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        """Return a flat JSON error body for configuration errors."""

        logger.error("Configuration error while handling %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_configuration_error(exc),
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": APP_VERSION}

    register_http_request_logging(app)
    configure_cross_origin(app, settings)

    app.include_router(tts_router)

    logger.info(
        "Application created with TTS router (allowed origins: %s)",
        ", ".join(settings.allowed_origins),
    )
    return app


def main() -> None:  # pragma: no cover - manual execution helper
    import sys

    import uvicorn

    setup_logging()
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logger.critical("Missing IBM credentials. Set them in the environment: %s", exc)
        sys.exit(1)

    app = create_app(settings)
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    main()
