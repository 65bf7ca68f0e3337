"""Ollama response translation.

Streams are NDJSON: one object per line, each carrying a ``message`` delta.
The final line carries ``done_reason`` and the eval counts.
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, List, Mapping, Optional

from ..base.translation import OpenAIResponseTranslator, dump_json_args


def usage_from(payload: Mapping[str, Any]) -> Dict[str, int]:
    prompt = int(payload.get("prompt_eval_count") or 0)
    completion = int(payload.get("eval_count") or 0)
    return {"prompt_tokens": prompt, "completion_tokens": completion, "total_tokens": prompt + completion}


def tool_calls_from(calls: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    out = []
    for i, call in enumerate(calls):
        fn = call.get("function") or {}
        args = fn.get("arguments")
        out.append(
            {
                "id": call.get("id") or f"call_{i}",
                "type": "function",
                "function": {
                    "name": fn.get("name") or "",
                    "arguments": args if isinstance(args, str) else dump_json_args(args or {}),
                },
            }
        )
    return out


class OllamaResponseTranslator(OpenAIResponseTranslator):
    def translate(self, platform_res: Mapping[str, Any]) -> Dict[str, Any]:
        raw_message = platform_res.get("message") or {}
        message: Dict[str, Any] = {
            "role": raw_message.get("role") or "assistant",
            "content": raw_message.get("content") or "",
        }
        if raw_message.get("tool_calls"):
            message["tool_calls"] = tool_calls_from(raw_message["tool_calls"])
        return {
            "id": platform_res.get("created_at") or "",
            "object": "chat.completion",
            "created": int(time.time()),
            "model": platform_res.get("model") or "",
            "choices": [{"index": 0, "message": message, "finish_reason": platform_res.get("done_reason")}],
            "usage": usage_from(platform_res),
        }

    # Streaming -----------------------------------------------------------
    def is_end_of_stream(self, chunk: str) -> bool:
        return '"done_reason"' in chunk

    def parse_chunk(self, chunk: str) -> Optional[Dict[str, Any]]:
        line = chunk.strip()
        return json.loads(line) if line else None

    def merge_chunk(self, parsed: Mapping[str, Any]) -> None:
        buf = self._buffer
        if parsed.get("error"):
            buf["error"] = parsed["error"]
            return
        self.capture_identity(
            {"id": parsed.get("created_at"), "model": parsed.get("model"), "created": int(time.time())}
        )
        choice = self.choice(0)
        message = choice["message"]
        delta = parsed.get("message") or {}
        if delta.get("role"):
            message["role"] = delta["role"]
        if delta.get("content"):
            message["content"] += delta["content"]
        for i, call in enumerate(delta.get("tool_calls") or []):
            self.merge_tool_call(message, {"index": i, **call})
        if parsed.get("done_reason"):
            choice["finish_reason"] = parsed["done_reason"]
        if "eval_count" in parsed or "prompt_eval_count" in parsed:
            buf["usage"] = usage_from(parsed)


__all__ = ["OllamaResponseTranslator", "tool_calls_from", "usage_from"]
