"""Third-party model registry index (models.dev).

One JSON document describes models for every provider. It is fetched from a
single shared URL and kept for ``ttl_seconds``. Enrichment is best-effort: a
failed fetch logs ``registry.fetch_failed`` and returns the stale copy (empty
when nothing was ever fetched) instead of raising.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from ...config.defaults import REGISTRY_TTL_SECONDS, REGISTRY_URL
from ..errors import ErrorCode, ProviderError, classify_exception, classify_status
from ..http import HttpxTransport
from ..interfaces import Transport
from ..logging import get_logger, log_event
from ..models import TransportRequest
from .cache import Clock

_logger = get_logger("chat_bridge.registry")


class ModelRegistryIndex:
    def __init__(
        self,
        transport: Optional[Transport] = None,
        *,
        clock: Clock = time.time,
        ttl_seconds: float = REGISTRY_TTL_SECONDS,
        url: str = REGISTRY_URL,
    ) -> None:
        self._transport = transport or HttpxTransport()
        self._clock = clock
        self.ttl_seconds = ttl_seconds
        self.url = url
        self._data: Dict[str, Any] = {}
        self._fetched_at: Optional[float] = None

    @property
    def fresh(self) -> bool:
        return self._fetched_at is not None and self._clock() - self._fetched_at < self.ttl_seconds

    async def fetch(self) -> Dict[str, Any]:
        """Return the registry index, refetching when stale."""
        if self.fresh:
            return self._data
        try:
            response = await self._transport.request(
                TransportRequest(url=self.url, method="GET", headers={"Accept": "application/json"})
            )
            status = response.status()
            if status >= 400:
                raise ProviderError(
                    code=classify_status(status) or ErrorCode.UNKNOWN,
                    message=f"model registry returned HTTP {status}",
                    provider="registry",
                    http_status=status,
                )
            data = response.json()
            if not isinstance(data, dict):
                raise ProviderError(code=ErrorCode.PARSE, message="model registry payload is not an object", provider="registry")
        except (ProviderError, ValueError) as exc:
            log_event(
                _logger,
                "registry.fetch_failed",
                level=logging.WARNING,
                url=self.url,
                error=str(exc),
                error_code=classify_exception(exc).value,
            )
            return self._data
        self._data = data
        self._fetched_at = self._clock()
        return self._data

    async def models_for(self, provider_key: str) -> Dict[str, Any]:
        """Return the registry ``models`` mapping for one provider."""
        entry = (await self.fetch()).get(provider_key) or {}
        models = entry.get("models") if isinstance(entry, dict) else None
        return models if isinstance(models, dict) else {}


_DEFAULT_REGISTRY: Optional[ModelRegistryIndex] = None


def get_default_registry(transport: Optional[Transport] = None) -> ModelRegistryIndex:
    """Return the process-wide registry index used when none is injected.

    ``transport`` is only used when the index is first created.
    """
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = ModelRegistryIndex(transport)
    return _DEFAULT_REGISTRY


__all__ = ["ModelRegistryIndex", "get_default_registry"]
