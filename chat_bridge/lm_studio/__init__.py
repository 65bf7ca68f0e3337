"""LM Studio provider package."""

from .client import LM_STUDIO, LM_STUDIO_CONFIG
from .chat_helpers import LmStudioChatTranslator
from .get_lm_studio_models import parse_lm_studio_models

__all__ = ["LM_STUDIO", "LM_STUDIO_CONFIG", "LmStudioChatTranslator", "parse_lm_studio_models"]
