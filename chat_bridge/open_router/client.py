"""OpenRouter provider definition."""

from __future__ import annotations

from typing import Any

from ..base.models import ProviderConfig
from ..base.provider_definition import ProviderDefinition
from ..base.tokens import estimate_tokens
from ..config.defaults import OPENROUTER_DEFAULT_MODEL, OPENROUTER_ENDPOINT, OPENROUTER_MODELS_ENDPOINT
from .chat_helpers import OpenRouterChatTranslator
from .get_open_router_models import parse_open_router_models
from .response_helpers import OpenRouterResponseTranslator

OPEN_ROUTER_CONFIG = ProviderConfig(
    key="open_router",
    description="Open Router",
    endpoint=OPENROUTER_ENDPOINT,
    default_model=OPENROUTER_DEFAULT_MODEL,
    models_endpoint=OPENROUTER_MODELS_ENDPOINT,
    models_endpoint_method="GET",
    registry_key="openrouter",
    signup_url="https://accounts.openrouter.ai/sign-up?redirect_url=https%3A%2F%2Fopenrouter.ai%2Fkeys",
)


async def estimate_open_router_tokens(adapter, value: Any) -> int:
    # no counting endpoint
    return estimate_tokens(value)


OPEN_ROUTER = ProviderDefinition(
    config=OPEN_ROUTER_CONFIG,
    request_translator=OpenRouterChatTranslator,
    response_translator=OpenRouterResponseTranslator,
    parse_models=parse_open_router_models,
    count_tokens=estimate_open_router_tokens,
)

__all__ = ["OPEN_ROUTER", "OPEN_ROUTER_CONFIG"]
