"""Explicit chat settings structure.

Purpose
-------
Enumerate every recognized option (with its default) instead of passing
duck-typed dictionaries around. Adapters and the orchestrator read settings
only through these models.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_dump()``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .defaults import (
    CATALOG_TTL_SECONDS,
    LOAD_RETRY_SECONDS,
    RE_RENDER_DELAY_SECONDS,
    REGISTRY_TTL_SECONDS,
    REGISTRY_URL,
)


class AdapterSettings(BaseModel):
    """Per-adapter settings.

    Attributes
    ----------
    api_key:
        Credential for the provider.
    model_key:
        Model selected for this adapter.
    base_url:
        Host override for self-hosted servers (Ollama, LM Studio) or proxies.
    """

    model_config = ConfigDict(protected_namespaces=(), extra="allow")

    api_key: Optional[str] = None
    model_key: Optional[str] = None
    base_url: Optional[str] = None


class ChatSettings(BaseModel):
    """Top-level settings for :class:`~chat_bridge.orchestrator.ChatOrchestrator`.

    Attributes
    ----------
    adapter:
        Selected adapter key. Unknown keys fall back to the first registered
        adapter.
    model_key:
        Global model selection (per-adapter ``model_key`` wins).
    api_key:
        Deprecated global credential used when the adapter has none.
    adapters:
        Per-adapter settings keyed by adapter key.
    catalog_ttl_seconds / registry_ttl_seconds / registry_url:
        Model catalog cache tuning.
    load_retry_seconds:
        Delay before the single automatic reload after a failed load.
    re_render_delay_seconds:
        Settle time before the settings re-render callback fires.
    """

    model_config = ConfigDict(protected_namespaces=())

    adapter: Optional[str] = None
    model_key: Optional[str] = None
    api_key: Optional[str] = None
    adapters: Dict[str, AdapterSettings] = Field(default_factory=dict)
    catalog_ttl_seconds: float = CATALOG_TTL_SECONDS
    registry_ttl_seconds: float = REGISTRY_TTL_SECONDS
    registry_url: str = REGISTRY_URL
    load_retry_seconds: float = LOAD_RETRY_SECONDS
    re_render_delay_seconds: float = RE_RENDER_DELAY_SECONDS

    def for_adapter(self, key: str) -> AdapterSettings:
        """Return (creating if needed) the settings block for ``key``."""
        if key not in self.adapters:
            self.adapters[key] = AdapterSettings()
        return self.adapters[key]

    @classmethod
    def from_env(cls, **overrides: Any) -> "ChatSettings":
        """Build settings from the config file ``settings`` section and env.

        Per-adapter blocks are filled from :func:`get_provider_config` so the
        usual defaults -> file -> env precedence applies.
        """
        from . import DEFAULTS, get_provider_config, get_settings_section

        data: Dict[str, Any] = get_settings_section()
        data |= {k: v for k, v in overrides.items() if v is not None}
        settings = cls.model_validate(data)
        for key in DEFAULTS:
            cfg = get_provider_config(key, include_defaults=False)
            block = settings.for_adapter(key)
            block.api_key = block.api_key or cfg.get("api_key")
            block.model_key = block.model_key or cfg.get("model")
            block.base_url = block.base_url or cfg.get("base_url")
        return settings


__all__ = ["AdapterSettings", "ChatSettings"]
