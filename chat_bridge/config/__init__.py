"""Unified configuration layer for chat adapters.

Goals
-----
* Centralize defaults (models, endpoints, cache TTLs).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``CHAT_BRIDGE_CONFIG_FILE``
    3. Environment variables (e.g. ``OPENAI_MODEL``, ``OPENAI_API_KEY``)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

Environment Variable Conventions
--------------------------------
``<PREFIX>_MODEL``, ``<PREFIX>_API_KEY``, ``<PREFIX>_BASE_URL`` where the prefix
is the upper-cased adapter key (``OPENROUTER`` for ``open_router``, ``GEMINI``
for ``google``).

External Config File
--------------------
``.json`` files are parsed with ``json``; anything else with PyYAML::

    openai:
      model: gpt-4o-mini
    ollama:
      base_url: http://gpu-box:11434
    settings:
      adapter: ollama
      catalog_ttl_seconds: 600
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .env import is_placeholder, resolve_provider_key
from .defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    COHERE_DEFAULT_MODEL,
    GEMINI_DEFAULT_MODEL,
    GROQ_DEFAULT_MODEL,
    LM_STUDIO_DEFAULT_HOST,
    LM_STUDIO_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_MODEL,
    XAI_DEFAULT_MODEL,
)

CONFIG_FILE_ENV = "CHAT_BRIDGE_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL},
    "google": {"model": GEMINI_DEFAULT_MODEL},
    "cohere": {"model": COHERE_DEFAULT_MODEL},
    "groq": {"model": GROQ_DEFAULT_MODEL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "base_url": OLLAMA_DEFAULT_HOST},
    "open_router": {"model": OPENROUTER_DEFAULT_MODEL},
    "xai": {"model": XAI_DEFAULT_MODEL},
    "lm_studio": {"model": LM_STUDIO_DEFAULT_MODEL, "base_url": LM_STUDIO_DEFAULT_HOST},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}

_ENV_PREFIX = {
    "open_router": "OPENROUTER",
    "google": "GEMINI",
    "gemini": "GEMINI",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    data = json.loads(text) if p.suffix.lower() == ".json" else yaml.safe_load(text)
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the parsed config file (tests and hot reload)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = _ENV_PREFIX.get(provider, provider.upper())
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and not is_placeholder(val):
            out[field] = val
    if "api_key" not in out:
        key, _ = resolve_provider_key(provider)
        if key:
            out["api_key"] = key
    return out


def get_provider_config(
    provider: str,
    overrides: Optional[Dict[str, Any]] = None,
    *,
    include_defaults: bool = True,
) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    With ``include_defaults=False`` only explicitly configured values are returned.
    """
    name = (provider or "").lower().strip()
    if name == "gemini":
        name = "google"
    cfg: Dict[str, Any] = {}

    if include_defaults:
        cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def get_settings_section() -> Dict[str, Any]:
    """Return the ``settings`` mapping from the external config file (if any)."""
    section = _load_external_config().get("settings")
    return dict(section) if isinstance(section, dict) else {}


from .settings import AdapterSettings, ChatSettings  # noqa: E402  (settings imports helpers above)

__all__ = [
    "get_provider_config",
    "get_settings_section",
    "reset_config_cache",
    "DEFAULTS",
    "AdapterSettings",
    "ChatSettings",
]
