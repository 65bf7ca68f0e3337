"""OpenRouter provider package."""

from .client import OPEN_ROUTER, OPEN_ROUTER_CONFIG
from .chat_helpers import OpenRouterChatTranslator
from .response_helpers import OpenRouterResponseTranslator
from .get_open_router_models import parse_open_router_models

__all__ = [
    "OPEN_ROUTER",
    "OPEN_ROUTER_CONFIG",
    "OpenRouterChatTranslator",
    "OpenRouterResponseTranslator",
    "parse_open_router_models",
]
