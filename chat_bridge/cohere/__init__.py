"""Cohere provider package."""

from .client import COHERE, COHERE_CONFIG
from .chat_helpers import CohereChatTranslator
from .response_helpers import CohereResponseTranslator
from .get_cohere_models import parse_cohere_models

__all__ = ["COHERE", "COHERE_CONFIG", "CohereChatTranslator", "CohereResponseTranslator", "parse_cohere_models"]
