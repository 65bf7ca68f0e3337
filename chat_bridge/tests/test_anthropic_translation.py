"""Anthropic Messages API translation, buffered and streamed."""
from __future__ import annotations

import json

from chat_bridge.anthropic import ANTHROPIC_CONFIG, AnthropicChatTranslator, AnthropicResponseTranslator
from chat_bridge.base.models import ChatRequest
from chat_bridge.base.translation import TranslationContext

from .helpers import sse

TOOLS = [{"type": "function", "function": {"name": "lookup", "description": "find", "parameters": {"type": "object"}}}]


def _body(data):
    ctx = TranslationContext(ANTHROPIC_CONFIG, api_key="ak")
    wire = AnthropicChatTranslator(ctx).to_platform(ChatRequest.from_dict(data))
    return wire, json.loads(wire.body)


def test_headers_use_x_api_key_and_version():
    wire, _ = _body({"messages": [{"role": "user", "content": "hi"}]})
    assert wire.headers["x-api-key"] == "ak"  # nosec B101
    assert "Authorization" not in wire.headers  # nosec B101
    assert wire.headers["anthropic-version"] == "2023-06-01"  # nosec B101


def test_system_messages_joined_and_removed():
    _, body = _body(
        {
            "messages": [
                {"role": "system", "content": "one"},
                {"role": "user", "content": "hi"},
                {"role": "system", "content": "two"},
            ]
        }
    )
    assert body["system"] == "one\n\ntwo"  # nosec B101
    assert [m["role"] for m in body["messages"]] == ["user"]  # nosec B101


def test_tool_round_trip_messages():
    _, body = _body(
        {
            "messages": [
                {"role": "user", "content": "weather?"},
                {
                    "role": "assistant",
                    "content": "checking",
                    "tool_calls": [{"id": "tu_1", "type": "function", "function": {"name": "lookup", "arguments": '{"city": "Oslo"}'}}],
                },
                {"role": "tool", "tool_call_id": "tu_1", "content": "rainy"},
            ],
            "tools": TOOLS,
        }
    )
    assistant, tool = body["messages"][1], body["messages"][2]
    assert assistant["content"][0] == {"type": "text", "text": "checking"}  # nosec B101
    assert assistant["content"][1] == {"type": "tool_use", "id": "tu_1", "name": "lookup", "input": {"city": "Oslo"}}  # nosec B101
    assert tool == {"role": "user", "content": [{"type": "tool_result", "tool_use_id": "tu_1", "content": "rainy"}]}  # nosec B101
    assert body["tools"] == [{"name": "lookup", "description": "find", "input_schema": {"type": "object"}}]  # nosec B101


def test_tool_choice_mapping():
    forced = {"type": "function", "function": {"name": "lookup"}}
    assert _body({"messages": [], "tools": TOOLS, "tool_choice": forced})[1]["tool_choice"] == {"type": "tool", "name": "lookup"}  # nosec B101
    assert _body({"messages": [], "tools": TOOLS, "tool_choice": "auto"})[1]["tool_choice"] == {"type": "auto"}  # nosec B101
    assert _body({"messages": [], "tools": TOOLS, "tool_choice": "required"})[1]["tool_choice"] == {"type": "any"}  # nosec B101
    assert "tool_choice" not in _body({"messages": [], "tools": TOOLS, "tool_choice": "none"})[1]  # nosec B101
    assert "tool_choice" not in _body({"messages": [], "tool_choice": forced})[1]  # nosec B101


def test_images_and_pdf_blocks():
    _, body = _body(
        {
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
                        {"type": "image_url", "image_url": {"url": "https://example.org/cat.png"}},
                        {"type": "file", "file": {"filename": "doc.PDF", "file_data": "data:application/pdf;base64,JVBE"}},
                    ],
                }
            ]
        }
    )
    blocks = body["messages"][0]["content"]
    assert blocks[0]["source"] == {"type": "base64", "media_type": "image/png", "data": "AAAA"}  # nosec B101
    assert blocks[1]["source"] == {"type": "url", "url": "https://example.org/cat.png"}  # nosec B101
    assert blocks[2]["type"] == "document" and blocks[2]["source"]["data"] == "JVBE"  # nosec B101


def test_buffered_response_translation():
    res = AnthropicResponseTranslator().to_openai(
        {
            "id": "msg_1",
            "model": "claude-x",
            "content": [
                {"type": "text", "text": "Let me check."},
                {"type": "tool_use", "id": "tu_1", "name": "lookup", "input": {"q": 1}},
            ],
            "stop_reason": "tool_use",
            "usage": {"input_tokens": 10, "output_tokens": 4},
        },
        200,
    )
    choice = res.choices[0]
    assert choice.finish_reason == "tool_calls" and choice.message.content == "Let me check."  # nosec B101
    assert json.loads(choice.message.tool_calls[0].function.arguments) == {"q": 1}  # nosec B101
    assert res.usage.to_dict() == {"prompt_tokens": 10, "completion_tokens": 4, "total_tokens": 14}  # nosec B101


def test_error_payload():
    res = AnthropicResponseTranslator().to_openai({"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}, 529)
    assert res.error.message == "Overloaded" and res.error.http_status == 529  # nosec B101


def test_stream_accumulates_text_and_tool_json_fragments():
    translator = AnthropicResponseTranslator()
    chunks = [
        "event: message_start",
        sse({"type": "message_start", "message": {"id": "msg_9", "model": "claude-x", "usage": {"input_tokens": 7}}}),
        sse({"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}}),
        sse({"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Hel"}}),
        sse({"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "lo"}}),
        sse({"type": "content_block_start", "index": 1, "content_block": {"type": "tool_use", "id": "tu_2", "name": "lookup"}}),
        sse({"type": "content_block_delta", "index": 1, "delta": {"type": "input_json_delta", "partial_json": '{"ci'}}),
        sse({"type": "content_block_delta", "index": 1, "delta": {"type": "input_json_delta", "partial_json": 'ty": "Oslo"}'}}),
        sse({"type": "message_delta", "delta": {"stop_reason": "end_turn"}, "usage": {"output_tokens": 3}}),
    ]
    for chunk in chunks:
        assert not translator.is_end_of_stream(chunk)  # nosec B101
        translator.handle_chunk(chunk)
    end = sse({"type": "message_stop"})
    assert translator.is_end_of_stream(end)  # nosec B101
    translator.handle_chunk(end)
    final = translator.finalize()
    assert final.id == "msg_9" and final.model == "claude-x"  # nosec B101
    assert final.content == "Hello"  # nosec B101
    call = final.choices[0].message.tool_calls[0]
    assert call.id == "tu_2" and json.loads(call.function.arguments) == {"city": "Oslo"}  # nosec B101
    assert final.choices[0].finish_reason == "stop"  # nosec B101
    assert final.usage.total_tokens == 10  # nosec B101
