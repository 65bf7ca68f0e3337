"""OpenAI provider package."""

from .client import OPENAI, OPENAI_CONFIG
from .chat_helpers import OpenAIChatTranslator
from .get_openai_models import parse_openai_models

__all__ = ["OPENAI", "OPENAI_CONFIG", "OpenAIChatTranslator", "parse_openai_models"]
