"""OpenRouter request translation: all-text user content is sent as one string."""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import ChatMessage
from ..base.translation import OpenAIRequestTranslator


class OpenRouterChatTranslator(OpenAIRequestTranslator):
    def transform_message(self, message: ChatMessage) -> Dict[str, Any]:
        data = message.to_dict()
        content = message.content
        if message.role == "user" and isinstance(content, list) and all(p.type == "text" for p in content):
            data["content"] = "\n".join(p.text or "" for p in content)
        return data


__all__ = ["OpenRouterChatTranslator"]
