"""Provider registry.

Purpose
-------
Map adapter keys to factories producing :class:`ChatAdapter` instances.
Provider packages are imported lazily with ``importlib`` so that selecting one
provider never imports the others.

Keys
----
``openai``, ``anthropic``, ``google``, ``gemini`` (deprecated alias of
``google``), ``cohere``, ``groq``, ``ollama``, ``open_router``, ``xai`` and
``lm_studio``. Registration order is significant: the orchestrator falls back
to the first entry when the configured key is unknown.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Any, Dict, Tuple

from .base.adapter import ChatAdapter
from .base.errors import ErrorCode, ProviderError
from .base.provider_definition import ProviderDefinition

_PROVIDERS: Dict[str, Tuple[str, str]] = {
    "openai": ("chat_bridge.openai.client", "OPENAI"),
    "anthropic": ("chat_bridge.anthropic.client", "ANTHROPIC"),
    "google": ("chat_bridge.gemini.client", "GOOGLE"),
    "gemini": ("chat_bridge.gemini.client", "GEMINI"),
    "cohere": ("chat_bridge.cohere.client", "COHERE"),
    "groq": ("chat_bridge.groq.client", "GROQ"),
    "ollama": ("chat_bridge.ollama.client", "OLLAMA"),
    "open_router": ("chat_bridge.open_router.client", "OPEN_ROUTER"),
    "xai": ("chat_bridge.xai.client", "XAI"),
    "lm_studio": ("chat_bridge.lm_studio.client", "LM_STUDIO"),
}


class UnknownProviderError(ProviderError):
    """Raised when an adapter key is not registered."""

    def __init__(self, key: str) -> None:
        super().__init__(code=ErrorCode.NOT_FOUND, message=f"Unknown adapter '{key}'", provider=key)


def get_definition(key: str) -> ProviderDefinition:
    """Import and return the :class:`ProviderDefinition` registered for ``key``."""
    try:
        module_name, attr = _PROVIDERS[key]
    except KeyError:
        raise UnknownProviderError(key) from None
    return getattr(import_module(module_name), attr)


@dataclass(frozen=True)
class AdapterFactory:
    """Callable building a :class:`ChatAdapter` for one registered key."""

    key: str

    @property
    def definition(self) -> ProviderDefinition:
        return get_definition(self.key)

    @property
    def description(self) -> str:
        return self.definition.config.description

    def __call__(self, **kwargs: Any) -> ChatAdapter:
        return ChatAdapter(self.definition, **kwargs)


ADAPTERS: Dict[str, AdapterFactory] = {key: AdapterFactory(key) for key in _PROVIDERS}


def create_adapter(key: str, **kwargs: Any) -> ChatAdapter:
    """Build the adapter registered under ``key``.

    Raises:
        UnknownProviderError: ``key`` is not registered.
    """
    if key not in ADAPTERS:
        raise UnknownProviderError(key)
    return ADAPTERS[key](**kwargs)


__all__ = ["ADAPTERS", "AdapterFactory", "UnknownProviderError", "create_adapter", "get_definition"]
