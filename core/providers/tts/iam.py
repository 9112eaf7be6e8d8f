"""IBM Cloud IAM bearer-token exchange for Watson services."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

import httpx

from config.tts.providers import watson as watson_config
from core.exceptions import ProviderError

logger = logging.getLogger(__name__)


class IAMTokenManager:
    """Exchange an API key for IAM access tokens and cache them until expiry."""

    def __init__(
        self,
        api_key: str,
        *,
        client: httpx.AsyncClient,
        token_url: str = watson_config.IAM_TOKEN_URL,
        refresh_margin: float = watson_config.TOKEN_REFRESH_MARGIN,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._api_key = api_key
        self._client = client
        self._token_url = token_url
        self._refresh_margin = refresh_margin
        self._clock = clock
        self._token: str | None = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    def _is_fresh(self) -> bool:
        return self._token is not None and self._clock() < self._expires_at - self._refresh_margin

    async def get_token(self) -> str:
        """Return a valid access token, requesting a new one when needed."""

        if self._is_fresh():
            return self._token  # type: ignore[return-value]

        async with self._lock:
            # Another coroutine may have refreshed while we waited.
            if self._is_fresh():
                return self._token  # type: ignore[return-value]
            await self._request_token()
            return self._token  # type: ignore[return-value]

    def invalidate(self) -> None:
        self._token = None
        self._expires_at = 0.0

    async def _request_token(self) -> None:
        logger.debug("Requesting IAM access token from %s", self._token_url)
        try:
            response = await self._client.post(
                self._token_url,
                data={"grant_type": watson_config.IAM_GRANT_TYPE, "apikey": self._api_key},
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise ProviderError(
                f"IAM token request failed: {exc}",
                provider=watson_config.PROVIDER_NAME,
                original_error=exc,
            ) from exc

        if response.status_code >= 400:
            message = _iam_error_message(response)
            logger.error("IAM token request rejected (%s): %s", response.status_code, message)
            raise ProviderError(
                message,
                provider=watson_config.PROVIDER_NAME,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            token = payload["access_token"]
        except (ValueError, KeyError, TypeError) as exc:
            raise ProviderError(
                "IAM token response did not contain an access token",
                provider=watson_config.PROVIDER_NAME,
                original_error=exc,
            ) from exc

        now = self._clock()
        expiration = payload.get("expiration")
        expires_in = payload.get("expires_in")
        if isinstance(expiration, (int, float)):
            expires_at = float(expiration)
        elif isinstance(expires_in, (int, float)):
            expires_at = now + float(expires_in)
        else:
            expires_at = now + 3600.0

        self._token = str(token)
        self._expires_at = expires_at
        logger.info("Obtained IAM access token (valid for %.0fs)", expires_at - now)


def _iam_error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = payload.get("errorMessage") or payload.get("error_description")
        if message:
            return str(message)
    return f"IAM token request returned {response.status_code}"


__all__ = ["IAMTokenManager"]
