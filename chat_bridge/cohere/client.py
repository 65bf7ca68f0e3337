"""Cohere provider definition (buffered completions only)."""

from __future__ import annotations

import json
from typing import Any

from ..base.models import ProviderConfig, TransportRequest
from ..base.provider_definition import ProviderDefinition
from ..base.tokens import input_to_text
from ..config.defaults import (
    COHERE_DEFAULT_MODEL,
    COHERE_ENDPOINT,
    COHERE_MODELS_ENDPOINT,
    COHERE_TOKENIZE_ENDPOINT,
)
from .chat_helpers import CohereChatTranslator
from .get_cohere_models import parse_cohere_models
from .response_helpers import CohereResponseTranslator

COHERE_CONFIG = ProviderConfig(
    key="cohere",
    description="Cohere Command-R",
    endpoint=COHERE_ENDPOINT,
    default_model=COHERE_DEFAULT_MODEL,
    streaming=False,
    models_endpoint=COHERE_MODELS_ENDPOINT,
    models_endpoint_method="GET",
    signup_url="https://dashboard.cohere.com/welcome/register?redirect_uri=%2Fapi-keys",
)


async def count_cohere_tokens(adapter, value: Any) -> int:
    request = TransportRequest(
        url=COHERE_TOKENIZE_ENDPOINT,
        method="POST",
        headers=adapter.auth_headers({"Content-Type": "application/json"}),
        body=json.dumps({"text": input_to_text(value), "model": adapter.model}),
    )
    payload = await adapter.fetch_json(request)
    return len(payload.get("tokens") or [])


COHERE = ProviderDefinition(
    config=COHERE_CONFIG,
    request_translator=CohereChatTranslator,
    response_translator=CohereResponseTranslator,
    parse_models=parse_cohere_models,
    count_tokens=count_cohere_tokens,
)

__all__ = ["COHERE", "COHERE_CONFIG", "count_cohere_tokens"]
