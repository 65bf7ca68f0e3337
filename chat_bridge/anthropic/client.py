"""Anthropic provider definition.

The catalog is registry-only: model metadata comes from the models.dev index.
Credentials are probed against ``GET /v1/models``.
"""

from __future__ import annotations

import logging

from ..base.errors import ProviderError
from ..base.logging import get_logger, log_event
from ..base.models import ProviderConfig, TransportRequest
from ..base.provider_definition import ProviderDefinition
from ..config.defaults import (
    ANTHROPIC_BETA,
    ANTHROPIC_DEFAULT_MODEL,
    ANTHROPIC_ENDPOINT,
    ANTHROPIC_MODELS_ENDPOINT,
    ANTHROPIC_VERSION,
)
from .chat_helpers import AnthropicChatTranslator
from .stream_helpers import AnthropicResponseTranslator

_logger = get_logger("chat_bridge.anthropic")

ANTHROPIC_CONFIG = ProviderConfig(
    key="anthropic",
    description="Anthropic Claude",
    endpoint=ANTHROPIC_ENDPOINT,
    default_model=ANTHROPIC_DEFAULT_MODEL,
    api_key_header="x-api-key",
    extra_headers={
        "anthropic-version": ANTHROPIC_VERSION,
        "anthropic-beta": ANTHROPIC_BETA,
        "anthropic-dangerous-direct-browser-access": "true",
    },
    signup_url="https://console.anthropic.com/login?returnTo=%2Fsettings%2Fkeys",
)


async def probe_anthropic_key(adapter) -> bool:
    request = TransportRequest(url=ANTHROPIC_MODELS_ENDPOINT, method="GET", headers=adapter.auth_headers())
    try:
        await adapter.fetch_json(request)
    except ProviderError as exc:
        log_event(_logger, "adapter.key_rejected", level=logging.WARNING, provider="anthropic", http_status=exc.http_status)
        return False
    return True


ANTHROPIC = ProviderDefinition(
    config=ANTHROPIC_CONFIG,
    request_translator=AnthropicChatTranslator,
    response_translator=AnthropicResponseTranslator,
    test_api_key=probe_anthropic_key,
)

__all__ = ["ANTHROPIC", "ANTHROPIC_CONFIG", "probe_anthropic_key"]
