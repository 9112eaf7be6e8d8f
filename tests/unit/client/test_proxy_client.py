import json

import httpx
import pytest

from client.api import ProxyClient, ProxyRequestError

BASE_URL = "http://proxy.test/api"


def _client(handler) -> ProxyClient:
    return ProxyClient(BASE_URL, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.anyio
async def test_fetch_voices_parses_catalog() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/voices"
        return httpx.Response(
            200,
            json=[
                {
                    "voice_id": "en-US_AllisonV3Voice",
                    "name": "Allison",
                    "gender": "female",
                    "language": "en-US",
                    "customizable": True,
                }
            ],
        )

    voices = await _client(_handler).fetch_voices()

    assert voices[0].voice_id == "en-US_AllisonV3Voice"
    assert voices[0].customizable is True


@pytest.mark.anyio
async def test_error_body_is_kept_verbatim() -> None:
    api = _client(lambda _: httpx.Response(500, json={"error": "Failed to fetch voices: Unauthorized"}))

    with pytest.raises(ProxyRequestError) as excinfo:
        await api.fetch_voices()

    assert excinfo.value.message == "Failed to fetch voices: Unauthorized"
    assert excinfo.value.server_message is True
    assert excinfo.value.status_code == 500


@pytest.mark.anyio
async def test_error_without_json_body_falls_back_to_status() -> None:
    api = _client(lambda _: httpx.Response(502, text="<html>Bad gateway</html>"))

    with pytest.raises(ProxyRequestError) as excinfo:
        await api.generate_speech("Hi", None)

    assert excinfo.value.message == "HTTP error! status: 502"
    assert excinfo.value.server_message is False


@pytest.mark.anyio
async def test_malformed_catalog_is_reported() -> None:
    api = _client(lambda _: httpx.Response(200, json={"voices": "nope"}))

    with pytest.raises(ProxyRequestError, match="Malformed voice catalog"):
        await api.fetch_voices()


@pytest.mark.anyio
async def test_generate_speech_posts_text_and_voice() -> None:
    seen = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, content=b"ID3-audio", headers={"Content-Type": "audio/mpeg"})

    api = _client(_handler)

    assert await api.generate_speech("Hello", None) == b"ID3-audio"
    assert await api.generate_speech("Hello", "en-GB_KateV3Voice") == b"ID3-audio"
    assert seen == [
        {"text": "Hello", "voice_id": ""},
        {"text": "Hello", "voice_id": "en-GB_KateV3Voice"},
    ]


@pytest.mark.anyio
async def test_transport_failure_becomes_proxy_error() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProxyRequestError) as excinfo:
        await _client(_handler).generate_speech("Hi", "v")

    assert excinfo.value.message == "connection refused"
    assert excinfo.value.status_code is None
