"""OpenRouter model list parsing."""

from __future__ import annotations

from typing import Any, Dict

from ..base.errors import ErrorCode, ProviderError
from ..base.models import ModelInfo


def parse_open_router_models(payload: Any, provider: str = "open_router") -> Dict[str, ModelInfo]:
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]
    if isinstance(payload, dict) and payload.get("error"):
        raise ProviderError(code=ErrorCode.PARSE, message=str(payload["error"]), provider=provider)
    out: Dict[str, ModelInfo] = {}
    for item in payload:
        architecture = item.get("architecture") or {}
        out[item["id"]] = ModelInfo(
            id=item["id"],
            name=item.get("name") or item["id"],
            provider=provider,
            max_input_tokens=item.get("context_length"),
            multimodal=architecture.get("modality") == "multimodal",
            description=item.get("description"),
            raw=item,
        )
    return out


__all__ = ["parse_open_router_models"]
