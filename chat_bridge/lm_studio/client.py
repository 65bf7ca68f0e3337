"""LM Studio (local, OpenAI compatible) provider definition.

No key is needed; CORS must be enabled in LM Studio's developer settings for
browser-hosted callers.
"""

from __future__ import annotations

from typing import Any

from ..base.models import ProviderConfig
from ..base.provider_definition import ProviderDefinition, host_base_url
from ..base.tokens import estimate_tokens
from ..config.defaults import LM_STUDIO_DEFAULT_HOST, LM_STUDIO_DEFAULT_MODEL
from .chat_helpers import LmStudioChatTranslator
from .get_lm_studio_models import parse_lm_studio_models

CHAT_PATH = "/v1/chat/completions"
MODELS_PATH = "/v1/models"

LM_STUDIO_CONFIG = ProviderConfig(
    key="lm_studio",
    description="LM Studio (OpenAI-compatible)",
    endpoint=f"{LM_STUDIO_DEFAULT_HOST}{CHAT_PATH}",
    default_model=LM_STUDIO_DEFAULT_MODEL,
    models_endpoint=f"{LM_STUDIO_DEFAULT_HOST}{MODELS_PATH}",
    models_endpoint_method="GET",
    api_key_required=False,
    signup_url="https://lmstudio.ai/docs/api/openai-api",
)


async def accept_any_key(adapter) -> bool:
    return True


async def estimate_lm_studio_tokens(adapter, value: Any) -> int:
    return estimate_tokens(value)


LM_STUDIO = ProviderDefinition(
    config=LM_STUDIO_CONFIG,
    request_translator=LmStudioChatTranslator,
    parse_models=parse_lm_studio_models,
    count_tokens=estimate_lm_studio_tokens,
    test_api_key=accept_any_key,
    apply_base_url=host_base_url(CHAT_PATH, MODELS_PATH),
)

__all__ = ["LM_STUDIO", "LM_STUDIO_CONFIG"]
