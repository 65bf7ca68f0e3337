"""Groq provider definition."""

from __future__ import annotations

from ..base.models import ProviderConfig
from ..base.provider_definition import ProviderDefinition
from ..base.translation import OpenAIResponseTranslator
from ..config.defaults import GROQ_DEFAULT_MODEL, GROQ_ENDPOINT, GROQ_MODELS_ENDPOINT
from .chat_helpers import GroqChatTranslator
from .get_groq_models import parse_groq_models

GROQ_CONFIG = ProviderConfig(
    key="groq",
    description="Groq",
    endpoint=GROQ_ENDPOINT,
    default_model=GROQ_DEFAULT_MODEL,
    models_endpoint=GROQ_MODELS_ENDPOINT,
    models_endpoint_method="GET",
    signup_url="https://groq.com",
)

GROQ = ProviderDefinition(
    config=GROQ_CONFIG,
    request_translator=GroqChatTranslator,
    response_translator=OpenAIResponseTranslator,
    parse_models=parse_groq_models,
)

__all__ = ["GROQ", "GROQ_CONFIG"]
