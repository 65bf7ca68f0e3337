"""Groq model list parsing (OpenAI-style ``{"object": "list", "data": [...]}``)."""

from __future__ import annotations

from typing import Any, Dict

from ..base.catalog import placeholder_catalog
from ..base.models import ModelInfo
from ..config.defaults import GROQ_DEFAULT_CONTEXT


def parse_groq_models(payload: Any, provider: str = "groq") -> Dict[str, ModelInfo]:
    if not isinstance(payload, dict) or payload.get("object") != "list" or not isinstance(payload.get("data"), list):
        return placeholder_catalog("No models found.", provider)
    out: Dict[str, ModelInfo] = {}
    for item in payload["data"]:
        model_id = item["id"]
        out[model_id] = ModelInfo(
            id=model_id,
            name=model_id,
            provider=provider,
            max_input_tokens=item.get("context_window") or GROQ_DEFAULT_CONTEXT,
            multimodal="vision" in model_id,
            description=f"Owned by: {item.get('owned_by')}, context: {item.get('context_window')}",
            raw=item,
        )
    return out


__all__ = ["parse_groq_models"]
