"""Provider definition record.

A provider is plain data plus a few functions: its :class:`ProviderConfig`,
the request/response translator classes, and optional hooks for the parts of
the adapter flow that differ per platform (model list parsing and fetching,
token counting, key testing, host overrides). :class:`ChatAdapter` runs the
shared flow and consults these hooks; there is no adapter subclass per
provider.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Optional, Type

from .models import ModelInfo, ProviderConfig, TransportRequest
from .translation import OpenAIRequestTranslator, OpenAIResponseTranslator

if TYPE_CHECKING:
    from .adapter import ChatAdapter

ModelParser = Callable[[Any, str], Dict[str, ModelInfo]]
ModelsRequestBuilder = Callable[["ChatAdapter"], TransportRequest]
ModelsFetcher = Callable[["ChatAdapter"], Awaitable[Any]]
TokenCounter = Callable[["ChatAdapter", Any], Awaitable[int]]
KeyTester = Callable[["ChatAdapter"], Awaitable[bool]]
BaseUrlApplier = Callable[[ProviderConfig, str], ProviderConfig]


@dataclass(frozen=True)
class ProviderDefinition:
    """Everything provider specific an adapter needs.

    Attributes:
        config: Static endpoint/auth/default-model record.
        request_translator: Class building the wire request from a
            :class:`TranslationContext`.
        response_translator: Class translating payloads and accumulating
            stream chunks; one instance per call.
        parse_models: ``(payload, provider_key) -> {id: ModelInfo}``. ``None``
            means the catalog comes from the model registry only.
        models_request: Builds the catalog request when the default
            (``models_endpoint`` + auth headers) does not fit.
        fetch_models: Replaces the single catalog request entirely (Ollama
            lists tags and then inspects each model).
        count_tokens: Provider counting endpoint; local tiktoken otherwise.
        test_api_key: Credential probe; the default asks the models endpoint.
        apply_base_url: Rewrites endpoints for a host override.
    """

    config: ProviderConfig
    request_translator: Type[OpenAIRequestTranslator] = OpenAIRequestTranslator
    response_translator: Type[OpenAIResponseTranslator] = OpenAIResponseTranslator
    parse_models: Optional[ModelParser] = None
    models_request: Optional[ModelsRequestBuilder] = None
    fetch_models: Optional[ModelsFetcher] = None
    count_tokens: Optional[TokenCounter] = None
    test_api_key: Optional[KeyTester] = None
    apply_base_url: Optional[BaseUrlApplier] = None

    @property
    def key(self) -> str:
        return self.config.key


def host_base_url(chat_path: str, models_path: Optional[str] = None) -> BaseUrlApplier:
    """Return an applier joining a host with fixed endpoint paths (local servers)."""

    def apply(config: ProviderConfig, base_url: str) -> ProviderConfig:
        host = base_url.rstrip("/")
        return config.with_overrides(
            endpoint=f"{host}{chat_path}",
            models_endpoint=f"{host}{models_path}" if models_path else None,
        )

    return apply


__all__ = ["ProviderDefinition", "ModelParser", "host_base_url"]
