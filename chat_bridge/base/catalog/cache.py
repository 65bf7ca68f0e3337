"""Model catalog cache service.

A provider-id keyed store of ``{models, loaded_at}`` shared by every adapter
instance of the same provider, so they share one fetch. It is an explicitly
constructed object passed to adapters; tests substitute a fake clock.

Reads and replacements are timestamp-gated without locks, which relies on the
single-threaded event loop; a threaded caller must add its own
synchronization.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from ...config.defaults import CATALOG_TTL_SECONDS
from ..models import ModelInfo

Clock = Callable[[], float]


@dataclass
class CatalogEntry:
    models: Dict[str, ModelInfo] = field(default_factory=dict)
    loaded_at: Optional[float] = None


class ModelCatalogCache:
    """Per-provider model catalogs with a validity window.

    Parameters:
        clock: Returns "now" in seconds (``time.time`` by default).
        ttl_seconds: A non-empty catalog younger than this is valid.
    """

    def __init__(self, clock: Clock = time.time, ttl_seconds: float = CATALOG_TTL_SECONDS) -> None:
        self._clock = clock
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[str, CatalogEntry] = {}

    def entry(self, provider: str) -> CatalogEntry:
        return self._entries.setdefault(provider, CatalogEntry())

    def get(self, provider: str) -> Dict[str, ModelInfo]:
        return self.entry(provider).models

    def set(self, provider: str, models: Dict[str, ModelInfo]) -> None:
        self._entries[provider] = CatalogEntry(models=dict(models), loaded_at=self._clock())

    def is_valid(self, provider: str) -> bool:
        entry = self._entries.get(provider)
        if entry is None or not entry.models or entry.loaded_at is None:
            return False
        return self._clock() - entry.loaded_at < self.ttl_seconds

    def clear(self, provider: Optional[str] = None) -> None:
        if provider is None:
            self._entries.clear()
        else:
            self._entries.pop(provider, None)


_DEFAULT_CACHE: Optional[ModelCatalogCache] = None


def get_default_catalog_cache() -> ModelCatalogCache:
    """Return the process-wide cache used when none is injected."""
    global _DEFAULT_CACHE
    if _DEFAULT_CACHE is None:
        _DEFAULT_CACHE = ModelCatalogCache()
    return _DEFAULT_CACHE


__all__ = ["ModelCatalogCache", "CatalogEntry", "get_default_catalog_cache", "Clock"]
