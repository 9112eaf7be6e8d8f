"""Async HTTP client for the proxy's two endpoints."""

from __future__ import annotations

import logging
from typing import Any, List

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.client import DEFAULT_API_BASE_URL, REQUEST_TIMEOUT
from features.tts.schemas.responses import VoiceDescriptor

logger = logging.getLogger(__name__)


class ProxyRequestError(Exception):
    """Raised when a call to the proxy does not succeed.

    ``server_message`` is True when ``message`` was taken verbatim from the
    proxy's ``{"error": ...}`` body, which already names the failed operation.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        server_message: bool = False,
    ):
        self.message = message
        self.status_code = status_code
        self.server_message = server_message
        super().__init__(self.message)


def _error_from_response(response: httpx.Response) -> ProxyRequestError:
    fallback = f"HTTP error! status: {response.status_code}"
    try:
        payload: Any = response.json()
    except ValueError:
        return ProxyRequestError(fallback, status_code=response.status_code)
    if isinstance(payload, dict) and isinstance(payload.get("error"), str) and payload["error"]:
        return ProxyRequestError(
            payload["error"], status_code=response.status_code, server_message=True
        )
    return ProxyRequestError(fallback, status_code=response.status_code)


class ProxyClient:
    """Thin wrapper over ``GET /voices`` and ``POST /generate-speech``."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "ProxyClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_voices(self) -> List[VoiceDescriptor]:
        url = f"{self.base_url}/voices"
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise ProxyRequestError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            raise _error_from_response(response)

        try:
            return [VoiceDescriptor.model_validate(item) for item in response.json()]
        except (ValueError, TypeError, PydanticValidationError) as exc:
            raise ProxyRequestError("Malformed voice catalog received") from exc

    async def generate_speech(self, text: str, voice_id: str | None) -> bytes:
        """Return the full audio body for ``text`` spoken by ``voice_id``."""

        url = f"{self.base_url}/generate-speech"
        body: dict[str, Any] = {"text": text, "voice_id": voice_id or ""}
        try:
            response = await self._client.post(url, json=body)
        except httpx.HTTPError as exc:
            raise ProxyRequestError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            raise _error_from_response(response)

        logger.debug("Received %d audio bytes", len(response.content))
        return response.content


__all__ = ["ProxyClient", "ProxyRequestError"]
