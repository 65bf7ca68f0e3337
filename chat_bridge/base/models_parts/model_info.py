"""
Model catalog entries.

``ModelInfo`` describes one model a provider exposes. Identity fields
(``id``, ``provider``) are set by the provider's model parser and are never
overwritten by registry enrichment. ``ModelOption`` is the ``{value, name}``
pair consumed by model pickers.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class ModelInfo:
    """Metadata about a single model.

    Attributes:
        id: Provider model identifier.
        name: Display name.
        provider: Adapter key the model belongs to.
        max_input_tokens / max_output_tokens: Context limits when known.
        multimodal: Whether image input is accepted.
        cost: Pricing metadata from the model registry.
        models_dev: Raw registry entry used for enrichment.
        description: Optional provider description.
        raw: Raw provider payload.
    """

    id: str
    name: str
    provider: str
    max_input_tokens: Optional[int] = None
    max_output_tokens: Optional[int] = None
    multimodal: bool = False
    cost: Optional[Dict[str, Any]] = None
    models_dev: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    raw: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class ModelOption:
    value: str
    name: str


__all__ = ["ModelInfo", "ModelOption"]
