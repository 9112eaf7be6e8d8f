from typing import AsyncIterator

import pytest

from core.providers.tts_base import SpeechStream


async def _chunks(*parts: bytes) -> AsyncIterator[bytes]:
    for part in parts:
        yield part


@pytest.mark.anyio
async def test_stream_yields_chunks_in_order_and_skips_empty() -> None:
    stream = SpeechStream(_chunks(b"a", b"", b"bc"))

    assert [chunk async for chunk in stream] == [b"a", b"bc"]


@pytest.mark.anyio
async def test_stream_closes_once_after_iteration() -> None:
    closed = []

    async def _on_close() -> None:
        closed.append(True)

    stream = SpeechStream(_chunks(b"x"), on_close=_on_close)
    [chunk async for chunk in stream]
    await stream.aclose()

    assert stream.closed is True
    assert closed == [True]


@pytest.mark.anyio
async def test_stream_cannot_be_replayed() -> None:
    stream = SpeechStream(_chunks(b"x"))
    [chunk async for chunk in stream]

    with pytest.raises(RuntimeError):
        [chunk async for chunk in stream]
