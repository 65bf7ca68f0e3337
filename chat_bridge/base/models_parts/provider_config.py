"""
Static per-provider configuration record.

Each adapter is constructed with one of these instead of looking up class
attributes at runtime. It is the only provider-specific data visible outside
the adapter package.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from ...config.defaults import DEFAULT_MAX_OUTPUT_TOKENS


@dataclass(frozen=True)
class ProviderConfig:
    """Endpoint table entry for one provider.

    Attributes:
        key: Adapter key (``"openai"``, ``"google"``...).
        description: Human readable platform name.
        endpoint: Completion endpoint.
        endpoint_streaming: Streaming endpoint when it differs.
        streaming: Whether the provider supports streamed completions.
        models_endpoint: Catalog endpoint (``None`` for registry-only catalogs).
        models_endpoint_method: HTTP method for the catalog endpoint.
        default_model: Model used when neither request nor settings pick one.
        api_key_header: ``None`` for bearer auth, ``"none"`` to send no auth
            header, otherwise the custom header name.
        extra_headers: Static headers added to every request.
        max_output_tokens: Default ``max_tokens`` for requests.
        signup_url: Where to obtain a key.
        registry_key: Provider id in the model registry if it differs from ``key``.
        chunk_splitting_regex: Pattern splitting the raw stream into chunks.
        api_key_required: ``False`` for local servers.
    """

    key: str
    description: str
    endpoint: str
    default_model: str
    endpoint_streaming: Optional[str] = None
    streaming: bool = True
    models_endpoint: Optional[str] = None
    models_endpoint_method: str = "POST"
    api_key_header: Optional[str] = None
    extra_headers: Dict[str, str] = field(default_factory=dict)
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    signup_url: Optional[str] = None
    registry_key: Optional[str] = None
    chunk_splitting_regex: Optional[str] = None
    api_key_required: bool = True
    type: str = "API"

    @property
    def registry_id(self) -> str:
        return self.registry_key or self.key

    def with_overrides(self, **changes) -> "ProviderConfig":
        """Return a copy with the given fields replaced (``None`` values ignored)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["ProviderConfig"]
