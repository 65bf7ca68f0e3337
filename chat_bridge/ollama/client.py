"""Ollama (local) provider definition."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ..base.models import ProviderConfig, TransportRequest
from ..base.provider_definition import ProviderDefinition, host_base_url
from ..config.defaults import OLLAMA_DEFAULT_HOST, OLLAMA_DEFAULT_MODEL
from .chat_helpers import OllamaChatTranslator
from .get_ollama_models import parse_ollama_models
from .stream_helpers import OllamaResponseTranslator

CHAT_PATH = "/api/chat"
TAGS_PATH = "/api/tags"
SHOW_PATH = "/api/show"

OLLAMA_CONFIG = ProviderConfig(
    key="ollama",
    description="Ollama (Local)",
    endpoint=f"{OLLAMA_DEFAULT_HOST}{CHAT_PATH}",
    default_model=OLLAMA_DEFAULT_MODEL,
    models_endpoint=f"{OLLAMA_DEFAULT_HOST}{TAGS_PATH}",
    models_endpoint_method="GET",
    api_key_header="none",
    api_key_required=False,
    signup_url="https://ollama.com/download",
)


def ollama_host(adapter) -> str:
    return (adapter.base_url or OLLAMA_DEFAULT_HOST).rstrip("/")


async def fetch_ollama_models(adapter) -> List[Dict[str, Any]]:
    """List installed tags, then inspect each model via ``/api/show``."""
    tags = await adapter.fetch_json(adapter.models_request())
    details = []
    for model in tags.get("models") or []:
        request = TransportRequest(
            url=f"{ollama_host(adapter)}{SHOW_PATH}",
            method="POST",
            headers={"Content-Type": "application/json"},
            body=json.dumps({"model": model["name"]}),
        )
        shown = await adapter.fetch_json(request)
        details.append({**shown, "name": model["name"]})
    return details


OLLAMA = ProviderDefinition(
    config=OLLAMA_CONFIG,
    request_translator=OllamaChatTranslator,
    response_translator=OllamaResponseTranslator,
    parse_models=parse_ollama_models,
    fetch_models=fetch_ollama_models,
    apply_base_url=host_base_url(CHAT_PATH, TAGS_PATH),
)

__all__ = ["OLLAMA", "OLLAMA_CONFIG", "fetch_ollama_models"]
