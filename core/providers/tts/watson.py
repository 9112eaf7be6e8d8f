"""IBM Watson Text to Speech provider implementation."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, List, Mapping

import httpx

from config.tts.providers import watson as watson_config
from core.exceptions import ProviderError
from core.providers.tts.iam import IAMTokenManager
from core.providers.tts_base import (
    BaseTTSProvider,
    ProviderVoice,
    SpeechStream,
    SynthesisRequest,
)

logger = logging.getLogger(__name__)


class WatsonTTSProvider(BaseTTSProvider):
    """Adapter around the Watson Text to Speech REST API."""

    name = watson_config.PROVIDER_NAME

    def __init__(
        self,
        *,
        api_key: str,
        service_url: str,
        client: httpx.AsyncClient,
        token_manager: IAMTokenManager | None = None,
    ) -> None:
        self._service_url = service_url.rstrip("/")
        self._client = client
        self._tokens = token_manager or IAMTokenManager(api_key, client=client)

    async def _auth_headers(self) -> dict[str, str]:
        token = await self._tokens.get_token()
        return {"Authorization": f"Bearer {token}"}

    async def list_voices(self) -> List[ProviderVoice]:
        url = f"{self._service_url}{watson_config.VOICES_PATH}"
        headers = await self._auth_headers()
        headers["Accept"] = "application/json"

        logger.info("Requesting Watson voice catalog")
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise ProviderError(
                _transport_message(exc), provider=self.name, original_error=exc
            ) from exc

        if response.status_code >= 400:
            self._raise_for_status(response)

        try:
            entries = response.json()["voices"]
            voices = [_parse_voice(entry) for entry in entries]
        except (ValueError, KeyError, TypeError) as exc:
            raise ProviderError(
                "Malformed voice catalog returned by provider",
                provider=self.name,
                original_error=exc,
            ) from exc

        logger.info("Watson returned %d voices", len(voices))
        return voices

    async def synthesize(self, request: SynthesisRequest) -> SpeechStream:
        if not request.text:
            raise ProviderError("TTS request text cannot be empty", provider=self.name)

        url = f"{self._service_url}{watson_config.SYNTHESIZE_PATH}"
        headers = await self._auth_headers()
        headers["Accept"] = request.accept

        logger.info(
            "Requesting Watson synthesis (voice=%s accept=%s chars=%d)",
            request.voice,
            request.accept,
            len(request.text),
        )

        outbound = self._client.build_request(
            "POST",
            url,
            params={"voice": request.voice},
            json={"text": request.text},
            headers=headers,
        )
        try:
            response = await self._client.send(outbound, stream=True)
        except httpx.HTTPError as exc:
            raise ProviderError(
                _transport_message(exc), provider=self.name, original_error=exc
            ) from exc

        if response.status_code >= 400:
            try:
                await response.aread()
            finally:
                await response.aclose()
            self._raise_for_status(response)

        media_type = response.headers.get("content-type", request.accept).split(";")[0].strip()
        return SpeechStream(
            self._relay(response),
            media_type=media_type or request.accept,
            on_close=response.aclose,
        )

    async def _relay(self, response: httpx.Response) -> AsyncIterator[bytes]:
        relayed = 0
        try:
            async for chunk in response.aiter_bytes(watson_config.BUFFER_SIZE):
                relayed += len(chunk)
                yield chunk
        except httpx.HTTPError as exc:
            logger.error("Watson audio stream interrupted after %d bytes: %s", relayed, exc)
            raise ProviderError(
                _transport_message(exc), provider=self.name, original_error=exc
            ) from exc
        logger.debug("Relayed %d audio bytes from Watson", relayed)

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            self._tokens.invalidate()
        message = _provider_error_message(response)
        logger.error("Watson returned %s: %s", response.status_code, message)
        raise ProviderError(message, provider=self.name, status_code=response.status_code)


def _parse_voice(entry: Mapping[str, Any]) -> ProviderVoice:
    name = entry["name"]
    return ProviderVoice(
        name=str(name),
        description=str(entry.get("description") or name),
        gender=entry.get("gender") or None,
        language=entry.get("language") or None,
        customizable=entry.get("customizable"),
    )


def _provider_error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = payload.get("error") or payload.get("message")
        if message:
            return str(message)
    reason = response.reason_phrase or "error"
    return f"Provider returned {response.status_code} {reason}"


def _transport_message(exc: httpx.HTTPError) -> str:
    return str(exc) or exc.__class__.__name__


__all__ = ["WatsonTTSProvider"]
