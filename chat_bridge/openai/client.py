"""OpenAI provider definition."""

from __future__ import annotations

from ..base.models import ProviderConfig
from ..base.provider_definition import ProviderDefinition
from ..base.translation import OpenAIResponseTranslator
from ..config.defaults import OPENAI_DEFAULT_MODEL, OPENAI_ENDPOINT, OPENAI_MODELS_ENDPOINT
from .chat_helpers import OpenAIChatTranslator
from .get_openai_models import parse_openai_models

OPENAI_CONFIG = ProviderConfig(
    key="openai",
    description="OpenAI",
    endpoint=OPENAI_ENDPOINT,
    default_model=OPENAI_DEFAULT_MODEL,
    models_endpoint=OPENAI_MODELS_ENDPOINT,
    models_endpoint_method="GET",
    signup_url="https://platform.openai.com/api-keys",
)

OPENAI = ProviderDefinition(
    config=OPENAI_CONFIG,
    request_translator=OpenAIChatTranslator,
    response_translator=OpenAIResponseTranslator,
    parse_models=parse_openai_models,
)

__all__ = ["OPENAI", "OPENAI_CONFIG"]
