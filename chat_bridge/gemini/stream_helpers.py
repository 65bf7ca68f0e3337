"""Gemini response translation and stream accumulation.

The streaming endpoint returns one JSON array whose elements arrive separated
by blank lines. Each raw chunk is stripped of the array framing (a leading
``[`` or ``,`` and a trailing ``]`` or ``,``) before parsing. The stream ends
with the chunk carrying ``finishReason``.
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, List, Mapping, Optional

from ..base.translation import OpenAIResponseTranslator, dump_json_args

FINISH_REASONS = {
    "STOP": "stop",
    "MAX_TOKENS": "length",
    "SAFETY": "content_filter",
    "RECITATION": "content_filter",
}


def finish_reason(reason: Optional[str]) -> Optional[str]:
    if not reason:
        return None
    return FINISH_REASONS.get(reason, reason.lower())


def usage_from(meta: Optional[Mapping[str, Any]]) -> Dict[str, int]:
    meta = meta or {}
    return {
        "prompt_tokens": int(meta.get("promptTokenCount") or 0),
        "completion_tokens": int(meta.get("candidatesTokenCount") or 0),
        "total_tokens": int(meta.get("totalTokenCount") or 0),
    }


def strip_array_framing(chunk: str) -> str:
    text = chunk.strip()
    if text[:1] in ("[", ","):
        text = text[1:]
    if text[-1:] in ("]", ","):
        text = text[:-1]
    return text.strip()


def function_call_entry(call: Mapping[str, Any], index: int) -> Dict[str, Any]:
    return {
        "id": call.get("id") or f"call_{index}",
        "type": "function",
        "function": {"name": call.get("name") or "", "arguments": dump_json_args(call.get("args") or {})},
    }


class GeminiResponseTranslator(OpenAIResponseTranslator):
    def _model(self, platform_res: Mapping[str, Any]) -> str:
        return platform_res.get("modelVersion") or (self.ctx.model if self.ctx else "")

    def translate(self, platform_res: Mapping[str, Any]) -> Dict[str, Any]:
        candidates = platform_res.get("candidates") or [{}]
        first = candidates[0]
        parts: List[Mapping[str, Any]] = (first.get("content") or {}).get("parts") or []
        message: Dict[str, Any] = {
            "role": "assistant",
            "content": "".join(p["text"] for p in parts if p.get("text")),
        }
        calls = [function_call_entry(p["functionCall"], i) for i, p in enumerate(q for q in parts if q.get("functionCall"))]
        if calls:
            message["tool_calls"] = calls
        return {
            "id": platform_res.get("responseId") or f"gemini-{int(time.time() * 1000)}",
            "object": "chat.completion",
            "created": int(time.time()),
            "model": self._model(platform_res),
            "choices": [{"index": 0, "message": message, "finish_reason": finish_reason(first.get("finishReason"))}],
            "usage": usage_from(platform_res.get("usageMetadata")),
        }

    # Streaming -----------------------------------------------------------
    def is_end_of_stream(self, chunk: str) -> bool:
        return '"finishReason"' in chunk

    def parse_chunk(self, chunk: str) -> Optional[Dict[str, Any]]:
        text = strip_array_framing(chunk)
        return json.loads(text) if text else None

    def merge_chunk(self, parsed: Mapping[str, Any]) -> None:
        buf = self._buffer
        if parsed.get("error"):
            buf["error"] = parsed["error"]
            return
        self.capture_identity(
            {
                "id": parsed.get("responseId") or f"gemini-{int(time.time() * 1000)}",
                "model": self._model(parsed),
                "created": int(time.time()),
            }
        )
        choice = self.choice(0)
        message = choice["message"]
        candidates = parsed.get("candidates") or []
        if candidates:
            first = candidates[0]
            for part in (first.get("content") or {}).get("parts") or []:
                if part.get("text"):
                    message["content"] += part["text"]
                if part.get("functionCall"):
                    calls = message.setdefault("tool_calls", [])
                    calls.append(function_call_entry(part["functionCall"], len(calls)))
            if first.get("finishReason"):
                choice["finish_reason"] = finish_reason(first["finishReason"])
        if parsed.get("usageMetadata"):
            buf["usage"] = usage_from(parsed["usageMetadata"])


__all__ = ["GeminiResponseTranslator", "FINISH_REASONS", "finish_reason", "strip_array_framing"]
