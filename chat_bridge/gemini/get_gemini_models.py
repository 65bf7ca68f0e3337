"""Gemini model list parsing (``GET /v1beta/models``)."""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import ModelInfo

GEMINI_PREFIX = "models/gemini"


def parse_gemini_models(payload: Any, provider: str = "google") -> Dict[str, ModelInfo]:
    out: Dict[str, ModelInfo] = {}
    for item in payload["models"]:
        name = item["name"]
        if not name.startswith(GEMINI_PREFIX):
            continue
        model_id = name.split("/")[-1]
        description = item.get("description") or ""
        out[model_id] = ModelInfo(
            id=model_id,
            name=item.get("displayName") or model_id,
            provider=provider,
            max_input_tokens=item.get("inputTokenLimit"),
            max_output_tokens=item.get("outputTokenLimit") or item.get("maxOutputTokens"),
            description=description or None,
            multimodal="vision" in name or "multimodal" in description,
            raw=item,
        )
    return out


__all__ = ["parse_gemini_models", "GEMINI_PREFIX"]
