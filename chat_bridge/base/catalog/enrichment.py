"""Merge model registry data onto provider catalogs.

Registry entries contribute display name, context limits, the multimodal flag
and pricing. Identity fields (``id``, ``provider``) of already-known models are
never touched. When a provider has no independently known models, the
registry list seeds the catalog outright.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping

from ...config.defaults import REGISTRY_DEFAULT_LIMIT
from ..models import ModelInfo


def _limits(entry: Mapping[str, Any]) -> tuple:
    limit = entry.get("limit") or {}
    return (
        limit.get("context") or REGISTRY_DEFAULT_LIMIT,
        limit.get("output") or REGISTRY_DEFAULT_LIMIT,
    )


def _is_multimodal(entry: Mapping[str, Any]) -> bool:
    modalities = entry.get("modalities") or {}
    return "image" in (modalities.get("input") or [])


def model_from_registry(model_id: str, entry: Mapping[str, Any], provider: str) -> ModelInfo:
    max_in, max_out = _limits(entry)
    return ModelInfo(
        id=model_id,
        name=entry.get("name") or model_id,
        provider=provider,
        max_input_tokens=max_in,
        max_output_tokens=max_out,
        multimodal=_is_multimodal(entry),
        cost=entry.get("cost"),
        models_dev=dict(entry),
    )


def enrich_models(
    known: Mapping[str, ModelInfo],
    registry_models: Mapping[str, Any],
    provider: str,
) -> Dict[str, ModelInfo]:
    """Return ``known`` enriched with ``registry_models`` (or seeded from it)."""
    if not known:
        return {
            model_id: model_from_registry(model_id, entry, provider)
            for model_id, entry in registry_models.items()
            if isinstance(entry, Mapping)
        }
    out: Dict[str, ModelInfo] = {}
    for model_id, info in known.items():
        entry = registry_models.get(model_id)
        if not isinstance(entry, Mapping):
            out[model_id] = info
            continue
        max_in, max_out = _limits(entry)
        out[model_id] = replace(
            info,
            name=entry.get("name") or info.name,
            max_input_tokens=max_in,
            max_output_tokens=max_out,
            multimodal=_is_multimodal(entry),
            cost=entry.get("cost"),
            models_dev=dict(entry),
        )
    return out


__all__ = ["enrich_models", "model_from_registry"]
