"""Anthropic provider package."""

from .client import ANTHROPIC, ANTHROPIC_CONFIG
from .chat_helpers import AnthropicChatTranslator
from .stream_helpers import AnthropicResponseTranslator

__all__ = ["ANTHROPIC", "ANTHROPIC_CONFIG", "AnthropicChatTranslator", "AnthropicResponseTranslator"]
