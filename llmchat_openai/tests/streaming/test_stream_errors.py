"""Streaming failure modes: HTTP status, malformed chunks, envelopes, transport."""
from __future__ import annotations

import httpx
import pytest

from llmchat_openai import ChatMessage, NetworkError, ServerError, StreamError, StreamState

from ..utils import chunk_json, error_json, make_client, paced_body, sse_body, sse_lines

MESSAGES = [ChatMessage.user("hi")]


@pytest.mark.asyncio
async def test_non_2xx_status_raises_server_error(log_capture):
    async with make_client(lambda request: httpx.Response(503, content=b"upstream unavailable")) as client:
        stream = client.stream("gpt-4o", MESSAGES)
        with pytest.raises(ServerError) as info:
            await stream.__anext__()
    assert info.value.status_code == 503  # nosec B101 - pytest assert in tests
    assert "503" in info.value.message  # nosec B101 - pytest assert in tests
    assert stream.state is StreamState.TERMINATED_ERROR and stream.error is info.value  # nosec B101 - pytest assert in tests
    finalize = log_capture.events("stream.finalize")
    assert finalize[0]["error_code"] == "server"  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_non_2xx_with_envelope_uses_server_message():
    async with make_client(lambda request: httpx.Response(401, json=error_json("Incorrect API key provided"))) as client:
        with pytest.raises(ServerError) as info:
            await client.stream("gpt-4o", MESSAGES).__anext__()
    assert info.value.status_code == 401  # nosec B101 - pytest assert in tests
    assert info.value.message == "Incorrect API key provided"  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_malformed_chunk_terminates_stream(log_capture):
    body = "".join(sse_lines([chunk_json("ok"), "{this is not json", chunk_json("never")])).encode()
    async with make_client(lambda request: httpx.Response(200, content=body)) as client:
        stream = client.stream("gpt-4o", MESSAGES)
        first = await stream.__anext__()
        with pytest.raises(StreamError):
            await stream.__anext__()
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()
    assert first.text == "ok"  # nosec B101 - pytest assert in tests
    assert stream.state is StreamState.TERMINATED_ERROR  # nosec B101 - pytest assert in tests
    assert log_capture.events("stream.decode_error")[0]["emitted"] is True  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_error_envelope_inside_stream():
    body = sse_body([chunk_json("partial"), error_json("Provider returned error", type_="server_error")], done=False)
    async with make_client(lambda request: httpx.Response(200, content=body)) as client:
        stream = client.stream("gpt-4o", MESSAGES)
        await stream.__anext__()
        with pytest.raises(StreamError) as info:
            await stream.__anext__()
    assert info.value.message == "Provider returned error"  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_open_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        stream = client.stream("gpt-4o", MESSAGES)
        with pytest.raises(NetworkError):
            await stream.__anext__()
    assert stream.state is StreamState.TERMINATED_ERROR  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_mid_stream_read_error_is_network_error():
    def handler(request):
        fail = httpx.ReadError("connection reset", request=request)
        return httpx.Response(200, content=paced_body(sse_lines([chunk_json("a")], done=False), fail=fail))

    async with make_client(handler) as client:
        stream = client.stream("gpt-4o", MESSAGES)
        assert (await stream.__anext__()).text == "a"  # nosec B101 - pytest assert in tests
        with pytest.raises(NetworkError) as info:
            await stream.__anext__()
    assert isinstance(info.value.cause, httpx.ReadError)  # nosec B101 - pytest assert in tests
