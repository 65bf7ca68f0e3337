"""Anthropic response translation and stream accumulation.

Buffered responses join text blocks with a blank line and turn ``tool_use``
blocks into tool calls. Streams arrive as SSE events:

- ``message_start``: id, model and input usage;
- ``content_block_start`` / ``content_block_delta``: text and
  ``input_json_delta`` fragments keyed by content block index;
- ``message_delta``: ``stop_reason`` and output usage;
- ``message_stop``: end of stream.

Text from successive blocks is separated by a blank line so a streamed answer
reads the same as its buffered counterpart.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping, Optional

from ..base.translation import OpenAIResponseTranslator, dump_json_args, tool_call_shell

FINISH_REASONS = {
    "end_turn": "stop",
    "max_tokens": "length",
    "tool_use": "tool_calls",
}

TEXT_SEPARATOR = "\n\n"


def finish_reason(stop_reason: Optional[str]) -> Optional[str]:
    if stop_reason is None:
        return None
    return FINISH_REASONS.get(stop_reason, stop_reason)


def usage_from(raw: Optional[Mapping[str, Any]]) -> Dict[str, int]:
    raw = raw or {}
    prompt = int(raw.get("input_tokens") or 0)
    completion = int(raw.get("output_tokens") or 0)
    return {"prompt_tokens": prompt, "completion_tokens": completion, "total_tokens": prompt + completion}


class AnthropicResponseTranslator(OpenAIResponseTranslator):
    def reset(self) -> None:
        super().reset()
        self._blocks: Dict[int, Dict[str, Any]] = {}
        self._usage: Dict[str, Any] = {}

    # Buffered ------------------------------------------------------------
    def translate(self, platform_res: Mapping[str, Any]) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": "assistant", "content": ""}
        calls = []
        content = platform_res.get("content")
        if isinstance(content, list):
            texts = []
            for block in content:
                if block.get("type") == "text":
                    texts.append(block.get("text") or "")
                elif block.get("type") == "tool_use":
                    calls.append(
                        {
                            "id": block.get("id") or "",
                            "type": "function",
                            "function": {"name": block.get("name") or "", "arguments": dump_json_args(block.get("input"))},
                        }
                    )
            message["content"] = TEXT_SEPARATOR.join(texts)
        elif isinstance(content, str):
            message["content"] = content
        if calls:
            message["tool_calls"] = calls
        return {
            "id": platform_res.get("id", ""),
            "object": "chat.completion",
            "created": int(time.time()),
            "model": platform_res.get("model", ""),
            "choices": [
                {"index": 0, "message": message, "finish_reason": finish_reason(platform_res.get("stop_reason"))}
            ],
            "usage": usage_from(platform_res.get("usage")),
        }

    # Streaming -----------------------------------------------------------
    def is_end_of_stream(self, chunk: str) -> bool:
        return "message_stop" in chunk

    def merge_chunk(self, parsed: Mapping[str, Any]) -> None:
        buf = self._buffer
        if parsed.get("type") == "error" or parsed.get("error"):
            buf["error"] = parsed.get("error") or parsed
            return
        kind = parsed.get("type")
        choice = self.choice(0)
        message = choice["message"]
        if kind == "message_start":
            start = parsed.get("message") or {}
            self.capture_identity({"id": start.get("id"), "model": start.get("model"), "created": int(time.time())})
            self._merge_usage(start.get("usage"))
        elif kind == "content_block_start":
            self._start_block(parsed.get("index", 0), parsed.get("content_block") or {}, message)
        elif kind == "content_block_delta":
            self._merge_delta(parsed.get("index", 0), parsed.get("delta") or {}, message)
        elif kind == "message_delta":
            delta = parsed.get("delta") or {}
            if delta.get("stop_reason"):
                choice["finish_reason"] = finish_reason(delta["stop_reason"])
            self._merge_usage(parsed.get("usage"))

    def _start_block(self, index: int, block: Mapping[str, Any], message: Dict[str, Any]) -> None:
        if block.get("type") == "tool_use":
            calls = message.setdefault("tool_calls", [])
            call = tool_call_shell()
            call["id"] = block.get("id") or ""
            call["function"]["name"] = block.get("name") or ""
            calls.append(call)
            self._blocks[index] = {"type": "tool_use", "call": len(calls) - 1}
            return
        self._blocks[index] = {"type": "text"}
        if message.get("content"):
            message["content"] += TEXT_SEPARATOR
        if block.get("text"):
            message["content"] += block["text"]

    def _merge_delta(self, index: int, delta: Mapping[str, Any], message: Dict[str, Any]) -> None:
        if delta.get("type") == "text_delta":
            if index not in self._blocks:
                self._start_block(index, {"type": "text"}, message)
            message["content"] = (message.get("content") or "") + (delta.get("text") or "")
        elif delta.get("type") == "input_json_delta":
            block = self._blocks.get(index)
            if block is None or block["type"] != "tool_use":
                return
            call = message["tool_calls"][block["call"]]
            call["function"]["arguments"] += delta.get("partial_json") or ""

    def _merge_usage(self, usage: Optional[Mapping[str, Any]]) -> None:
        if not usage:
            return
        self._usage.update({k: v for k, v in usage.items() if v is not None})
        self._buffer["usage"] = usage_from(self._usage)


__all__ = ["AnthropicResponseTranslator", "FINISH_REASONS", "finish_reason", "usage_from"]
