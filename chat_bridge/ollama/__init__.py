"""Ollama provider package."""

from .client import OLLAMA, OLLAMA_CONFIG
from .chat_helpers import OllamaChatTranslator
from .stream_helpers import OllamaResponseTranslator
from .get_ollama_models import parse_ollama_models

__all__ = ["OLLAMA", "OLLAMA_CONFIG", "OllamaChatTranslator", "OllamaResponseTranslator", "parse_ollama_models"]
