"""Model picker options derived from a catalog."""
from __future__ import annotations

from typing import Dict, List, Mapping

from ...config.defaults import NO_MODELS_OPTION_NAME
from ..models import ModelInfo, ModelOption

NO_MODELS_OPTION = ModelOption(value="", name=NO_MODELS_OPTION_NAME)


def models_as_options(models: Mapping[str, ModelInfo]) -> List[ModelOption]:
    """Return ``{value, name}`` pairs sorted by name (placeholder when empty)."""
    if not models:
        return [NO_MODELS_OPTION]
    options = [ModelOption(value=key, name=info.name or key) for key, info in models.items()]
    return sorted(options, key=lambda o: o.name)


def placeholder_catalog(message: str, provider: str) -> Dict[str, ModelInfo]:
    """Single ``_`` entry returned by parsers when a model list is malformed."""
    return {"_": ModelInfo(id=message, name=message, provider=provider)}


__all__ = ["models_as_options", "placeholder_catalog", "NO_MODELS_OPTION"]
