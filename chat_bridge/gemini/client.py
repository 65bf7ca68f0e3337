"""Google Gemini provider definitions (``google`` and the deprecated ``gemini`` alias)."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any
from urllib.parse import urlencode

from ..base.models import ProviderConfig, TransportRequest
from ..base.provider_definition import ProviderDefinition
from ..config.defaults import GEMINI_BASE_URL, GEMINI_DEFAULT_MODEL
from .chat_helpers import GeminiChatTranslator, model_url, token_count_body
from .get_gemini_models import parse_gemini_models
from .stream_helpers import GeminiResponseTranslator

GOOGLE_CONFIG = ProviderConfig(
    key="google",
    description="Google (Gemini)",
    endpoint=f"{GEMINI_BASE_URL}/models/{{model}}:generateContent",
    endpoint_streaming=f"{GEMINI_BASE_URL}/models/{{model}}:streamGenerateContent",
    default_model=GEMINI_DEFAULT_MODEL,
    models_endpoint=f"{GEMINI_BASE_URL}/models",
    models_endpoint_method="GET",
    api_key_header="none",
    signup_url="https://ai.google.dev/",
    chunk_splitting_regex=r"(\r\n|\n|\r){2}",
)


def gemini_models_request(adapter) -> TransportRequest:
    base = (adapter.base_url or GEMINI_BASE_URL).rstrip("/")
    url = f"{base}/models"
    if adapter.api_key:
        url += "?" + urlencode({"key": adapter.api_key})
    return TransportRequest(url=url, method="GET", headers={"Accept": "application/json"})


async def count_gemini_tokens(adapter, value: Any) -> int:
    request = TransportRequest(
        url=model_url(adapter.context(), adapter.model, "countTokens"),
        method="POST",
        headers={"Content-Type": "application/json"},
        body=json.dumps(token_count_body(value)),
    )
    payload = await adapter.fetch_json(request)
    return int(payload.get("totalTokens") or 0)


GOOGLE = ProviderDefinition(
    config=GOOGLE_CONFIG,
    request_translator=GeminiChatTranslator,
    response_translator=GeminiResponseTranslator,
    parse_models=parse_gemini_models,
    models_request=gemini_models_request,
    count_tokens=count_gemini_tokens,
)

GEMINI = replace(
    GOOGLE,
    config=replace(GOOGLE_CONFIG, key="gemini", description="Gemini (switch to the google adapter)", registry_key="google"),
)

__all__ = ["GOOGLE", "GEMINI", "GOOGLE_CONFIG", "count_gemini_tokens", "gemini_models_request"]
