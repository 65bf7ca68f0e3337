"""Per-call translation context.

Translators receive the provider configuration record and the resolved
credentials / model selection through this object rather than reaching back
into the adapter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..models import ProviderConfig


@dataclass(frozen=True)
class TranslationContext:
    config: ProviderConfig
    api_key: Optional[str] = None
    model_key: Optional[str] = None
    base_url: Optional[str] = None

    @property
    def model(self) -> str:
        return self.model_key or self.config.default_model


__all__ = ["TranslationContext"]
