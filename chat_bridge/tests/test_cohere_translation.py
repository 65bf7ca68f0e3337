"""Cohere chat translation (buffered only) and its token endpoint."""
from __future__ import annotations

import json

import pytest

from chat_bridge.base.errors import CapabilityError, ErrorCode
from chat_bridge.base.models import ChatRequest
from chat_bridge.base.translation import TranslationContext
from chat_bridge.cohere import COHERE, COHERE_CONFIG, CohereChatTranslator, CohereResponseTranslator, parse_cohere_models

from .helpers import FakeResponse


def _body(data):
    ctx = TranslationContext(COHERE_CONFIG, api_key="co")
    return json.loads(CohereChatTranslator(ctx).to_platform(ChatRequest.from_dict(data)).body)


def test_last_message_and_history():
    body = _body(
        {
            "messages": [
                {"role": "system", "content": "rules"},
                {"role": "user", "content": "hi"},
                {"role": "assistant", "content": "hello"},
                {"role": "user", "content": [{"type": "text", "text": "and"}, {"type": "text", "text": "now?"}]},
            ],
            "temperature": 0.1,
        }
    )
    assert body["message"] == "and\nnow?"  # nosec B101
    assert body["chat_history"] == [
        {"role": "SYSTEM", "message": "rules"},
        {"role": "USER", "message": "hi"},
        {"role": "CHATBOT", "message": "hello"},
    ]  # nosec B101
    assert body["stream"] is False and body["temperature"] == 0.1  # nosec B101


def test_tool_choice_dropped_without_tools():
    body = _body({"messages": [{"role": "user", "content": "q"}], "tool_choice": "required"})
    assert "tool_choice" not in body and "tools" not in body  # nosec B101


def test_passthrough_options_and_tools():
    body = _body(
        {
            "messages": [{"role": "user", "content": "q"}],
            "preamble": "You are helpful",
            "documents": [{"title": "t", "snippet": "s"}],
            "response_format": {"type": "json_object", "schema": {"type": "object"}},
            "tools": [{"type": "function", "function": {"name": "f", "description": "d", "parameters": {"type": "object"}}}],
            "tool_choice": "required",
        }
    )
    assert body["preamble"] == "You are helpful" and body["documents"][0]["title"] == "t"  # nosec B101
    assert body["response_format"] == {"type": "json_object", "schema": {"type": "object"}}  # nosec B101
    assert body["tools"] == [{"name": "f", "description": "d", "parameters": {"type": "object"}}]  # nosec B101
    assert body["tool_choice"] == "required"  # nosec B101


def test_images_are_rejected():
    with pytest.raises(CapabilityError) as info:
        _body({"messages": [{"role": "user", "content": [{"type": "image_url", "image_url": {"url": "https://x/y.png"}}]}]})
    assert info.value.code is ErrorCode.UNSUPPORTED  # nosec B101
    assert info.value.message == "Cohere API does not support image input"  # nosec B101
    assert info.value.provider == "cohere"  # nosec B101


def test_response_translation():
    ctx = TranslationContext(COHERE_CONFIG, model_key="command-r-plus")
    res = CohereResponseTranslator(ctx).to_openai(
        {
            "text": "Answer",
            "generation_id": "gen-1",
            "finish_reason": "MAX_TOKENS",
            "citations": [{"start": 0}],
            "meta": {"billed_units": {"input_tokens": 5, "output_tokens": 2}},
        },
        200,
    )
    assert res.id == "gen-1" and res.model == "command-r-plus" and res.content == "Answer"  # nosec B101
    assert res.choices[0].finish_reason == "length"  # nosec B101
    assert res.usage.total_tokens == 7 and res.extra == {"citations": [{"start": 0}]}  # nosec B101


def test_bare_message_payload_is_an_error():
    res = CohereResponseTranslator().to_openai({"message": "invalid api token"}, 401)
    assert res.error.message == "invalid api token" and res.error.http_status == 401  # nosec B101


def test_model_parser_keeps_command_family():
    models = parse_cohere_models({"models": [{"name": "command-r", "context_length": 128000}, {"name": "embed-english"}]}, "cohere")
    assert list(models) == ["command-r"] and models["command-r"].max_input_tokens == 128000  # nosec B101


@pytest.mark.asyncio
async def test_stream_falls_back_to_single_done(make_adapter, transport):
    transport.add("https://api.cohere.ai/v1/chat", FakeResponse({"text": "hi", "finish_reason": "COMPLETE"}))
    adapter = make_adapter(COHERE)
    seen = {"chunk": 0, "done": [], "error": []}
    handlers = {
        "chunk": lambda r: seen.__setitem__("chunk", seen["chunk"] + 1),
        "done": seen["done"].append,
        "error": seen["error"].append,
    }
    result = await adapter.stream({"messages": [{"role": "user", "content": "yo"}]}, handlers)
    assert result.content == "hi"  # nosec B101
    assert len(seen["done"]) == 1 and not seen["error"] and seen["chunk"] == 0  # nosec B101
    assert transport.stream_requests == []  # nosec B101


@pytest.mark.asyncio
async def test_count_tokens_uses_tokenize(make_adapter, transport):
    transport.add("https://api.cohere.ai/v1/tokenize", FakeResponse({"tokens": [1, 2, 3]}))
    adapter = make_adapter(COHERE)
    assert await adapter.count_tokens("abc def") == 3  # nosec B101
    assert json.loads(transport.requests[-1].body)["text"] == "abc def"  # nosec B101
