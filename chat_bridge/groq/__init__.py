"""Groq provider package."""

from .client import GROQ, GROQ_CONFIG
from .chat_helpers import GroqChatTranslator
from .get_groq_models import parse_groq_models

__all__ = ["GROQ", "GROQ_CONFIG", "GroqChatTranslator", "parse_groq_models"]
