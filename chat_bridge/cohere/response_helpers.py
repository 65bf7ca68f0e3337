"""Cohere response translation (buffered only; the adapter never streams)."""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping

from ..base.translation import OpenAIResponseTranslator

FINISH_REASONS = {
    "COMPLETE": "stop",
    "STOP_SEQUENCE": "stop",
    "MAX_TOKENS": "length",
    "ERROR": "error",
}

EXTRA_KEYS = ("citations", "documents", "search_queries", "search_results")


class CohereResponseTranslator(OpenAIResponseTranslator):
    def extract_error(self, platform_res: Mapping[str, Any]) -> Any:
        # error payloads are a bare {"message": ...}
        return platform_res.get("error") or platform_res.get("message") or None

    def translate(self, platform_res: Mapping[str, Any]) -> Dict[str, Any]:
        billed = (platform_res.get("meta") or {}).get("billed_units") or {}
        prompt = int(billed.get("input_tokens") or 0)
        completion = int(billed.get("output_tokens") or 0)
        return {
            "id": platform_res.get("generation_id") or f"cohere-{int(time.time() * 1000)}",
            "object": "chat.completion",
            "created": int(time.time()),
            "model": self.ctx.model if self.ctx else "",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": platform_res.get("text") or ""},
                    "finish_reason": FINISH_REASONS.get(platform_res.get("finish_reason"), "stop"),
                }
            ],
            "usage": {"prompt_tokens": prompt, "completion_tokens": completion, "total_tokens": prompt + completion},
            "extra": {k: platform_res[k] for k in EXTRA_KEYS if platform_res.get(k)},
        }


__all__ = ["CohereResponseTranslator", "FINISH_REASONS"]
