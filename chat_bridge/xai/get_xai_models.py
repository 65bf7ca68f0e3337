"""xAI Grok model list parsing (``data`` or ``models`` wrapper)."""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import ModelInfo
from ..config.defaults import XAI_DEFAULT_CONTEXT


def parse_xai_models(payload: Any, provider: str = "xai") -> Dict[str, ModelInfo]:
    payload = payload or {}
    out: Dict[str, ModelInfo] = {}
    for item in payload.get("data") or payload.get("models") or []:
        model_id = item.get("id") or item.get("name")
        out[model_id] = ModelInfo(
            id=model_id,
            name=model_id,
            provider=provider,
            max_input_tokens=item.get("context_length") or XAI_DEFAULT_CONTEXT,
            multimodal="vision" in (item.get("modality") or ""),
            description=item.get("description") or f"context: {item.get('context_length') or 'n/a'}",
            raw=item,
        )
    return out


__all__ = ["parse_xai_models"]
