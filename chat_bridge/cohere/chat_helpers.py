"""Cohere ``/v1/chat`` request translation.

Cohere takes the final message as ``message`` and everything before it as
``chat_history`` with upper-case roles. Image input is rejected with a
:class:`CapabilityError` before any request is sent. Cohere-only options
(``preamble``, ``conversation_id``, ``connectors``, ``documents``,
``response_format``) pass through from ``ChatRequest.extra``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ..base.errors import CapabilityError
from ..base.models import ChatMessage, ChatRequest
from ..base.translation import OpenAIRequestTranslator

ROLE_MAP = {"system": "SYSTEM", "user": "USER", "assistant": "CHATBOT", "function": "CHATBOT"}
PASSTHROUGH_KEYS = ("preamble", "conversation_id", "connectors", "documents")
IMAGE_UNSUPPORTED = "Cohere API does not support image input"


def cohere_text(message: ChatMessage) -> str:
    if not isinstance(message.content, list):
        return message.content or ""
    return "\n".join(
        p.text or "" if p.type == "text" else json.dumps(p.to_dict()) for p in message.content
    )


class CohereChatTranslator(OpenAIRequestTranslator):
    def to_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        self.ensure_supported(request)
        messages = request.messages
        body: Dict[str, Any] = {
            "model": request.model or self.ctx.model,
            "message": cohere_text(messages[-1]) if messages else "",
            "chat_history": [self.transform_message(m) for m in messages[:-1]],
            "max_tokens": request.max_tokens or self.config.max_output_tokens,
            "stream": False,
        }
        if request.temperature is not None:
            body["temperature"] = request.temperature
        if request.tools:
            body["tools"] = [
                {
                    "name": t.function.name,
                    "description": t.function.description,
                    "parameters": t.function.parameters,
                }
                for t in request.tools
            ]
            if request.tool_choice:
                body["tool_choice"] = request.tool_choice
        for key in PASSTHROUGH_KEYS:
            if request.extra.get(key):
                body[key] = request.extra[key]
        response_format = request.extra.get("response_format")
        if isinstance(response_format, dict):
            body["response_format"] = {"type": response_format.get("type")}
            if response_format.get("schema"):
                body["response_format"]["schema"] = response_format["schema"]
        return body

    def ensure_supported(self, request: ChatRequest) -> None:
        for message in request.messages:
            if any(p.type == "image_url" for p in message.parts()) or message.image_url:
                raise CapabilityError(message=IMAGE_UNSUPPORTED, provider=self.config.key, model=request.model)

    def transform_message(self, message: ChatMessage) -> Dict[str, Any]:
        return {"role": ROLE_MAP.get(message.role, message.role.upper()), "message": cohere_text(message)}


__all__ = ["CohereChatTranslator", "cohere_text", "IMAGE_UNSUPPORTED"]
