"""LM Studio model list parsing (OpenAI-style list)."""

from __future__ import annotations

from typing import Any, Dict

from ..base.catalog import placeholder_catalog
from ..base.models import ModelInfo


def parse_lm_studio_models(payload: Any, provider: str = "lm_studio") -> Dict[str, ModelInfo]:
    if not isinstance(payload, dict) or payload.get("object") != "list" or not isinstance(payload.get("data"), list):
        return placeholder_catalog("No models found.", provider)
    return {
        item["id"]: ModelInfo(
            id=item["id"],
            name=item["id"],
            provider=provider,
            description=f"LM Studio model: {item['id']}",
            raw=item,
        )
        for item in payload["data"]
    }


__all__ = ["parse_lm_studio_models"]
