"""xAI Grok provider definition; the API is OpenAI compatible."""

from __future__ import annotations

from ..base.models import ProviderConfig
from ..base.provider_definition import ProviderDefinition
from ..config.defaults import XAI_DEFAULT_MODEL, XAI_ENDPOINT, XAI_MODELS_ENDPOINT
from .get_xai_models import parse_xai_models

XAI_CONFIG = ProviderConfig(
    key="xai",
    description="xAI Grok",
    endpoint=XAI_ENDPOINT,
    default_model=XAI_DEFAULT_MODEL,
    models_endpoint=XAI_MODELS_ENDPOINT,
    models_endpoint_method="GET",
    signup_url="https://ide.x.ai",
)

XAI = ProviderDefinition(config=XAI_CONFIG, parse_models=parse_xai_models)

__all__ = ["XAI", "XAI_CONFIG"]
