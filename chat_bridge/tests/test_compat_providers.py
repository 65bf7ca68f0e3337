"""Groq, OpenRouter and xAI: OpenAI-dialect providers with small twists."""
from __future__ import annotations

import json

import pytest

from chat_bridge.base.errors import ErrorCode, ProviderError
from chat_bridge.base.models import ChatRequest
from chat_bridge.base.translation import TranslationContext
from chat_bridge.groq import GROQ, GROQ_CONFIG, GroqChatTranslator, parse_groq_models
from chat_bridge.open_router import (
    OPEN_ROUTER,
    OPEN_ROUTER_CONFIG,
    OpenRouterChatTranslator,
    OpenRouterResponseTranslator,
    parse_open_router_models,
)
from chat_bridge.open_router.response_helpers import KEY_SUGGESTION
from chat_bridge.xai import XAI, parse_xai_models

from .helpers import FakeResponse, FakeStreamSource, sse

PARTS = [{"type": "text", "text": "one"}, {"type": "text", "text": "two"}]


def test_groq_flattens_assistant_and_tool_content():
    req = ChatRequest.from_dict(
        {
            "messages": [
                {"role": "user", "content": PARTS},
                {"role": "assistant", "content": PARTS},
                {"role": "tool", "tool_call_id": "c1", "content": PARTS},
            ]
        }
    )
    body = json.loads(GroqChatTranslator(TranslationContext(GROQ_CONFIG, api_key="g")).to_platform(req).body)
    user, assistant, tool = body["messages"]
    assert isinstance(user["content"], list)  # nosec B101
    assert assistant["content"] == "one\ntwo" and tool["content"] == "one\ntwo"  # nosec B101
    assert body["model"] == "llama3-8b-8192"  # nosec B101


def test_groq_parser():
    models = parse_groq_models(
        {"object": "list", "data": [{"id": "llama-3.2-11b-vision", "context_window": 8000}, {"id": "mixtral"}]},
        "groq",
    )
    assert models["llama-3.2-11b-vision"].multimodal  # nosec B101
    assert models["mixtral"].max_input_tokens == 8192  # nosec B101
    assert list(parse_groq_models({"error": "bad"}, "groq")) == ["_"]  # nosec B101


def test_open_router_joins_text_only_user_content():
    req = ChatRequest.from_dict(
        {
            "messages": [
                {"role": "user", "content": PARTS},
                {"role": "user", "content": [PARTS[0], {"type": "image_url", "image_url": {"url": "https://x/y.png"}}]},
            ]
        }
    )
    body = json.loads(OpenRouterChatTranslator(TranslationContext(OPEN_ROUTER_CONFIG)).to_platform(req).body)
    assert body["messages"][0]["content"] == "one\ntwo"  # nosec B101
    assert isinstance(body["messages"][1]["content"], list)  # nosec B101


def test_open_router_error_appends_upstream_body():
    res = OpenRouterResponseTranslator().to_openai(
        {"error": {"message": "Provider returned error", "code": 400, "metadata": {"raw": {"detail": "bad"}}}},
        400,
    )
    assert res.error.message == 'Provider returned error\n\n{\n  "detail": "bad"\n}'  # nosec B101
    assert res.error.http_status == 400  # nosec B101


def test_open_router_cookie_auth_suggests_key_fix():
    res = OpenRouterResponseTranslator().to_openai({"error": {"message": "No cookie auth credentials found"}}, 401)
    assert res.error.details["suggested_action"] == KEY_SUGGESTION  # nosec B101


@pytest.mark.asyncio
async def test_open_router_stream_error_is_expanded(make_adapter, transport):
    transport.add_stream(
        FakeStreamSource([sse({"error": {"message": "Upstream failed", "metadata": {"raw": "timeout"}}})])
    )
    adapter = make_adapter(OPEN_ROUTER)
    errors = []
    with pytest.raises(ProviderError) as info:
        await adapter.stream({"messages": [{"role": "user", "content": "hi"}]}, {"error": errors.append})
    assert errors[0].message == "Upstream failed\n\ntimeout"  # nosec B101
    assert info.value.message == "Upstream failed\n\ntimeout"  # nosec B101


def test_open_router_parser():
    models = parse_open_router_models(
        {"data": [{"id": "a/b", "name": "B", "context_length": 4096, "architecture": {"modality": "multimodal"}}]},
        "open_router",
    )
    assert models["a/b"].name == "B" and models["a/b"].multimodal  # nosec B101
    with pytest.raises(ProviderError) as info:
        parse_open_router_models({"error": "quota"}, "open_router")
    assert info.value.code is ErrorCode.PARSE  # nosec B101


@pytest.mark.asyncio
async def test_open_router_registry_key_and_local_estimate(make_adapter, transport, registry):
    transport.add("https://openrouter.ai/api/v1/models", FakeResponse({"data": [{"id": "a/b"}]}))
    adapter = make_adapter(OPEN_ROUTER)
    await adapter.get_models(refresh=True)
    assert registry.calls == ["openrouter"]  # nosec B101
    assert await adapter.count_tokens("abcdefgh") == 2  # nosec B101


def test_xai_parser_accepts_both_wrappers():
    by_data = parse_xai_models({"data": [{"id": "grok-2-vision", "modality": "text+vision"}]}, "xai")
    by_models = parse_xai_models({"models": [{"name": "grok-3", "context_length": 64000}]}, "xai")
    assert by_data["grok-2-vision"].multimodal  # nosec B101
    assert by_data["grok-2-vision"].max_input_tokens == 128000  # nosec B101
    assert by_models["grok-3"].max_input_tokens == 64000  # nosec B101


@pytest.mark.asyncio
async def test_xai_uses_openai_wire_format(make_adapter, transport):
    transport.add(
        "https://api.x.ai/v1/chat/completions",
        FakeResponse({"id": "x-1", "model": "grok-3-mini-beta", "choices": [{"index": 0, "message": {"role": "assistant", "content": "hey"}}]}),
    )
    res = await make_adapter(XAI).complete({"messages": [{"role": "user", "content": "hi"}]})
    assert res.content == "hey"  # nosec B101
    assert transport.requests[-1].headers["Authorization"] == "Bearer sk-live"  # nosec B101
    assert GROQ.key == "groq"  # nosec B101
