from dataclasses import replace

import pytest
from fastapi import FastAPI

from core.config import Settings
from main import create_app
from tests.helpers import ALLOWED_ORIGIN, FakeTTSProvider, asgi_client


@pytest.mark.anyio
async def test_allowed_origin_receives_cors_headers(app: FastAPI) -> None:
    async with asgi_client(app) as client:
        response = await client.get("/api/voices", headers={"Origin": ALLOWED_ORIGIN})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN


@pytest.mark.anyio
async def test_disallowed_origin_is_rejected_before_provider(
    app: FastAPI, fake_provider: FakeTTSProvider
) -> None:
    async with asgi_client(app) as client:
        response = await client.post(
            "/api/generate-speech",
            json={"text": "Hello world"},
            headers={"Origin": "https://evil.example"},
        )

    assert response.status_code == 403
    assert response.json() == {"error": "Origin not allowed: https://evil.example"}
    assert "access-control-allow-origin" not in response.headers
    assert fake_provider.synth_calls == []
    assert fake_provider.list_calls == 0


@pytest.mark.anyio
async def test_preflight_allows_configured_methods(app: FastAPI) -> None:
    async with asgi_client(app) as client:
        response = await client.options(
            "/api/generate-speech",
            headers={
                "Origin": ALLOWED_ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

    assert response.status_code == 200
    allowed = response.headers["access-control-allow-methods"]
    assert "POST" in allowed and "GET" in allowed
    assert "DELETE" not in allowed


@pytest.mark.anyio
async def test_preflight_from_disallowed_origin_fails(app: FastAPI) -> None:
    async with asgi_client(app) as client:
        response = await client.options(
            "/api/voices",
            headers={
                "Origin": "https://evil.example",
                "Access-Control-Request-Method": "GET",
            },
        )

    assert response.status_code >= 400
    assert "access-control-allow-origin" not in response.headers


@pytest.mark.anyio
async def test_requests_without_origin_are_served(app: FastAPI) -> None:
    async with asgi_client(app) as client:
        response = await client.get("/api/voices")

    assert response.status_code == 200


@pytest.mark.anyio
async def test_mixed_case_allow_list_matches_browser_origin(settings: Settings) -> None:
    app = create_app(
        replace(settings, allowed_origins=("https://TextToSpeech3.Netlify.app/",)),
        provider=FakeTTSProvider(),
    )

    async with asgi_client(app) as client:
        allowed = await client.get("/api/voices", headers={"Origin": ALLOWED_ORIGIN})
        rejected = await client.get(
            "/api/voices", headers={"Origin": "https://TextToSpeech3.Netlify.app"}
        )

    assert allowed.status_code == 200
    assert allowed.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert rejected.status_code == 403
