"""httpx transport against ``httpx.MockTransport`` (no sockets)."""
from __future__ import annotations

import json

import httpx
import pytest

from chat_bridge.base.adapter import ChatAdapter
from chat_bridge.base.errors import ErrorCode, ProviderError
from chat_bridge.base.http import HttpxTransport
from chat_bridge.base.models import TransportRequest
from chat_bridge.gemini.client import GOOGLE_CONFIG
from chat_bridge.openai import OPENAI

from .helpers import FakeRegistry


def _transport(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport(client), client


async def _collect(source):
    return [chunk async for chunk in source.stream()]


@pytest.mark.asyncio
async def test_buffered_request_round_trip():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"ok": True})

    transport, client = _transport(handler)
    response = await transport.request(
        TransportRequest(url="https://api.test/v1/x", method="POST", headers={"Authorization": "Bearer k"}, body='{"a": 1}')
    )
    assert response.status() == 201 and response.json() == {"ok": True}  # nosec B101
    assert seen == {"method": "POST", "auth": "Bearer k", "body": {"a": 1}}  # nosec B101
    await client.aclose()


@pytest.mark.asyncio
async def test_connection_failure_becomes_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport, client = _transport(handler)
    with pytest.raises(ProviderError) as info:
        await transport.request(TransportRequest(url="https://api.test/v1/x"))
    assert info.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert info.value.details == {"url": "https://api.test/v1/x"}  # nosec B101
    await client.aclose()


@pytest.mark.asyncio
async def test_stream_yields_non_blank_lines():
    body = b'data: {"a": 1}\n\n: ping\n\ndata: [DONE]\n\n'
    transport, client = _transport(lambda request: httpx.Response(200, content=body))
    chunks = await _collect(transport.open_stream(TransportRequest(url="https://api.test/stream", method="POST")))
    assert chunks == ['data: {"a": 1}', ": ping", "data: [DONE]"]  # nosec B101
    await client.aclose()


@pytest.mark.asyncio
async def test_stream_regex_framing_flushes_remainder():
    body = b'[{"n": 1}\r\n\r\n,{"n": 2}\n\n,{"n": 3}]'
    transport, client = _transport(lambda request: httpx.Response(200, content=body))
    source = transport.open_stream(TransportRequest(url="https://api.test/stream"), GOOGLE_CONFIG.chunk_splitting_regex)
    assert await _collect(source) == ['[{"n": 1}', ',{"n": 2}', ',{"n": 3}]']  # nosec B101
    await client.aclose()


@pytest.mark.asyncio
async def test_stream_error_status_is_normalized():
    body = {"error": {"message": "Rate limit reached", "type": "requests"}}
    transport, client = _transport(lambda request: httpx.Response(429, json=body))
    with pytest.raises(ProviderError) as info:
        await _collect(transport.open_stream(TransportRequest(url="https://api.test/stream")))
    err = info.value
    assert err.code is ErrorCode.RATE_LIMIT and err.http_status == 429  # nosec B101
    assert err.message == "Rate limit reached" and err.details == {"type": "requests"}  # nosec B101
    await client.aclose()


@pytest.mark.asyncio
async def test_adapter_over_httpx(catalog):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/models"):
            return httpx.Response(200, json={"data": [{"id": "gpt-4o"}]})
        return httpx.Response(
            200,
            content=b'data: {"id": "c", "choices": [{"index": 0, "delta": {"content": "ok"}}]}\n\ndata: [DONE]\n\n',
        )

    transport, client = _transport(handler)
    adapter = ChatAdapter(OPENAI, api_key="sk", transport=transport, catalog=catalog, registry=FakeRegistry())
    assert list(await adapter.get_models(refresh=True)) == ["gpt-4o"]  # nosec B101
    result = await adapter.stream({"messages": [{"role": "user", "content": "hi"}]})
    assert result.content == "ok"  # nosec B101
    await client.aclose()


@pytest.mark.asyncio
async def test_non_json_error_body_is_wrapped(catalog):
    transport, client = _transport(lambda request: httpx.Response(502, text="Bad Gateway"))
    adapter = ChatAdapter(OPENAI, api_key="sk", transport=transport, catalog=catalog, registry=FakeRegistry())
    result = await adapter.complete({"messages": [{"role": "user", "content": "hi"}]})
    assert result.error.message == "Bad Gateway" and result.error.http_status == 502  # nosec B101
    await client.aclose()
