"""OpenAI-shaped response translator and streaming accumulator.

Buffered mode
    ``to_openai(payload, status)`` translates one provider payload. A payload
    carrying ``error`` short-circuits into a canonical response whose
    ``error`` is the normalized error, with ``status`` attached.

Streaming mode
    ``handle_chunk(chunk)`` merges one raw chunk into a mutable buffer that
    always holds the canonical (OpenAI) shape, seeded with empty defaults.
    Strings are appended in place, the first id/model/created seen are kept,
    and tool-call fragments are concatenated per call ``index``.
    ``is_end_of_stream`` is evaluated by the caller before ``handle_chunk``,
    and ``handle_chunk`` ignores terminal sentinels, so ``[DONE]`` is never
    parsed as JSON. ``finalize()`` converts the buffer once the stream ends.

A translator instance belongs to exactly one request; adapters create a new
one per call, so the buffer is only ever touched by its own stream.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from ..errors import NormalizedError, normalize_error
from ..models import ChatCompletionResponse
from .content import dump_json_args
from .context import TranslationContext

SSE_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"


def empty_buffer() -> Dict[str, Any]:
    return {
        "id": "",
        "object": "chat.completion",
        "created": 0,
        "model": "",
        "choices": [],
        "usage": {},
    }


def tool_call_shell() -> Dict[str, Any]:
    return {"id": "", "type": "function", "function": {"name": "", "arguments": ""}}


class OpenAIResponseTranslator:
    """OpenAI chat-completions payload -> canonical response."""

    def __init__(self, ctx: Optional[TranslationContext] = None) -> None:
        self.ctx = ctx
        self.reset()

    def reset(self) -> None:
        self._buffer: Dict[str, Any] = empty_buffer()

    @property
    def buffer(self) -> Dict[str, Any]:
        return self._buffer

    # Buffered ------------------------------------------------------------
    def to_openai(self, platform_res: Any, status: Optional[int] = None) -> ChatCompletionResponse:
        if not isinstance(platform_res, Mapping):
            return ChatCompletionResponse.from_error(self.normalize_error(platform_res, status), raw=platform_res)
        error = self.extract_error(platform_res)
        if error is not None:
            return ChatCompletionResponse.from_error(self.normalize_error(error, status), raw=platform_res)
        return ChatCompletionResponse.from_dict(self.translate(platform_res), raw=platform_res)

    def extract_error(self, platform_res: Mapping[str, Any]) -> Any:
        return platform_res.get("error") or None

    def normalize_error(self, error: Any, status: Optional[int] = None) -> NormalizedError:
        return normalize_error(error, status)

    def translate(self, platform_res: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the canonical dict for a successful provider payload."""
        return {
            "id": platform_res.get("id", ""),
            "object": platform_res.get("object", "chat.completion"),
            "created": platform_res.get("created", 0),
            "model": platform_res.get("model", ""),
            "choices": platform_res.get("choices") or [],
            "usage": platform_res.get("usage") or {},
        }

    # Streaming -----------------------------------------------------------
    def is_end_of_stream(self, chunk: str) -> bool:
        return chunk.strip() == f"{SSE_PREFIX} {DONE_SENTINEL}" or chunk.strip() == f"{SSE_PREFIX}{DONE_SENTINEL}"

    def parse_chunk(self, chunk: str) -> Optional[Dict[str, Any]]:
        """Decode an SSE ``data:`` line; other SSE fields and sentinels give ``None``."""
        line = chunk.strip()
        if not line.startswith(SSE_PREFIX):
            return None
        data = line[len(SSE_PREFIX):].strip()
        if not data or data == DONE_SENTINEL:
            return None
        return json.loads(data)

    def handle_chunk(self, chunk: str) -> None:
        parsed = self.parse_chunk(chunk)
        if parsed is not None:
            self.merge_chunk(parsed)

    def merge_chunk(self, parsed: Mapping[str, Any]) -> None:
        buf = self._buffer
        if parsed.get("error"):
            buf["error"] = parsed["error"]
            return
        self.capture_identity(parsed)
        for raw_choice in parsed.get("choices") or []:
            index = raw_choice.get("index")
            choice = self.choice(index if isinstance(index, int) else 0)
            delta = raw_choice.get("delta") or raw_choice.get("message") or {}
            message = choice["message"]
            content = delta.get("content")
            if isinstance(content, str):
                message["content"] = (message.get("content") or "") + content
            for fragment in delta.get("tool_calls") or []:
                self.merge_tool_call(message, fragment)
            if raw_choice.get("finish_reason"):
                choice["finish_reason"] = raw_choice["finish_reason"]
        if parsed.get("usage"):
            buf["usage"] = dict(parsed["usage"])

    def capture_identity(self, parsed: Mapping[str, Any]) -> None:
        buf = self._buffer
        for key in ("id", "model", "created"):
            if not buf.get(key) and parsed.get(key):
                buf[key] = parsed[key]

    def choice(self, index: int = 0) -> Dict[str, Any]:
        """Return (seeding as needed) the buffered choice at ``index``."""
        choices: List[Dict[str, Any]] = self._buffer["choices"]
        while len(choices) <= index:
            choices.append(
                {
                    "index": len(choices),
                    "message": {"role": "assistant", "content": ""},
                    "finish_reason": None,
                }
            )
        return choices[index]

    def merge_tool_call(self, message: Dict[str, Any], fragment: Mapping[str, Any]) -> None:
        calls: List[Dict[str, Any]] = message.setdefault("tool_calls", [])
        index = fragment.get("index")
        if not isinstance(index, int):
            index = len(calls)
        while len(calls) <= index:
            calls.append(tool_call_shell())
        call = calls[index]
        if fragment.get("id") and not call["id"]:
            call["id"] = fragment["id"]
        fn = fragment.get("function") or {}
        if fn.get("name"):
            call["function"]["name"] += fn["name"]
        args = fn.get("arguments")
        if isinstance(args, str):
            call["function"]["arguments"] += args
        elif args is not None:
            call["function"]["arguments"] = dump_json_args(args)

    def finalize(self) -> ChatCompletionResponse:
        error = self._buffer.get("error")
        if error:
            return ChatCompletionResponse.from_error(self.normalize_error(error), raw=dict(self._buffer))
        return self.snapshot()

    def snapshot(self) -> ChatCompletionResponse:
        return ChatCompletionResponse.from_dict(self._buffer, raw=dict(self._buffer))


__all__ = [
    "OpenAIResponseTranslator",
    "empty_buffer",
    "tool_call_shell",
    "SSE_PREFIX",
    "DONE_SENTINEL",
]
