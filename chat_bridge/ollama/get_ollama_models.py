"""Ollama model list parsing.

The payload is the list built by the Ollama ``fetch_models`` hook: one
``/api/show`` body per installed model, with ``name`` added. Embedding models
are skipped; the context length comes from the ``*.context_length`` key of
``model_info``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ..base.logging import get_logger, log_event
from ..base.models import ModelInfo
from ..config.defaults import NO_MODELS_OPTION_NAME

NO_MODELS_ID = "no_models_available"

_logger = get_logger("chat_bridge.catalog")


def context_length(model_info: Optional[Mapping[str, Any]]) -> Optional[int]:
    for key, value in (model_info or {}).items():
        if ".context_length" in key:
            return value
    return None


def parse_ollama_models(payload: Any, provider: str = "ollama") -> Dict[str, ModelInfo]:
    if not isinstance(payload, list):
        log_event(_logger, "catalog.invalid_payload", level=logging.WARNING, provider=provider)
        return {}
    if not payload:
        return {NO_MODELS_ID: ModelInfo(id=NO_MODELS_ID, name=NO_MODELS_OPTION_NAME, provider=provider)}
    out: Dict[str, ModelInfo] = {}
    for item in payload:
        name = item["name"]
        if "embed" in name:
            continue
        out[name] = ModelInfo(
            id=name,
            name=name,
            provider=provider,
            max_input_tokens=context_length(item.get("model_info")),
            raw=item,
        )
    return out


__all__ = ["parse_ollama_models", "context_length", "NO_MODELS_ID"]
