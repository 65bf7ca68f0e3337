"""Cohere model list parsing (``GET /v1/models``)."""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import ModelInfo


def parse_cohere_models(payload: Any, provider: str = "cohere") -> Dict[str, ModelInfo]:
    out: Dict[str, ModelInfo] = {}
    for item in payload["models"]:
        name = item["name"]
        if not name.startswith("command-"):
            continue
        out[name] = ModelInfo(
            id=name,
            name=name,
            provider=provider,
            max_input_tokens=item.get("context_length"),
            description=f"Max input tokens: {item.get('context_length')}, Finetuned: {item.get('finetuned')}",
            raw=item,
        )
    return out


__all__ = ["parse_cohere_models"]
