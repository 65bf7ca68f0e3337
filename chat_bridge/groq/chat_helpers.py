"""Groq request translation.

Groq speaks the OpenAI dialect but rejects structured content on assistant and
tool turns, so those are flattened to a newline-joined string.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import ChatMessage
from ..base.translation import OpenAIRequestTranslator

FLATTENED_ROLES = ("assistant", "tool")


class GroqChatTranslator(OpenAIRequestTranslator):
    def transform_message(self, message: ChatMessage) -> Dict[str, Any]:
        data = message.to_dict()
        if message.role in FLATTENED_ROLES and isinstance(message.content, list):
            data["content"] = "\n".join(p.text or "" for p in message.content)
        return data


__all__ = ["GroqChatTranslator"]
