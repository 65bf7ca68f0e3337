"""Google Gemini provider package."""

from .client import GEMINI, GOOGLE, GOOGLE_CONFIG
from .chat_helpers import GeminiChatTranslator
from .stream_helpers import GeminiResponseTranslator
from .get_gemini_models import parse_gemini_models

__all__ = [
    "GOOGLE",
    "GEMINI",
    "GOOGLE_CONFIG",
    "GeminiChatTranslator",
    "GeminiResponseTranslator",
    "parse_gemini_models",
]
