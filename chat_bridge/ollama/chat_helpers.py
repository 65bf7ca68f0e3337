"""Ollama ``/api/chat`` request translation.

Messages carry plain text plus an optional ``images`` list of bare base64
payloads; assistant tool calls replay with object ``arguments``. Sampling
knobs move under ``options``. Ollama has no forced tool choice, so a pinned
tool is requested in the prompt and the reply is constrained to JSON.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from ..base.models import ChatMessage, ChatRequest
from ..base.translation import OpenAIRequestTranslator, load_json_args

DATA_URL_PREFIX = re.compile(r"^data:image/[^;]+;base64,")

OPTION_FIELDS = (
    ("temperature", "temperature"),
    ("top_p", "top_p"),
    ("frequency_penalty", "frequency_penalty"),
    ("presence_penalty", "presence_penalty"),
)


def message_images(message: ChatMessage) -> List[str]:
    return [
        DATA_URL_PREFIX.sub("", p.image_url)
        for p in message.parts()
        if p.type == "image_url" and p.image_url
    ]


class OllamaChatTranslator(OpenAIRequestTranslator):
    def to_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": request.model or self.ctx.model,
            "messages": [self.transform_message(m) for m in request.messages],
            "options": self.options(request),
            "stream": stream,
        }
        if request.tools:
            body["tools"] = [t.to_dict() for t in request.tools]
            forced = request.forced_tool_name()
            if forced and body["messages"]:
                body["messages"][-1]["content"] += f'\n\nUse the "{forced}" tool.'
                body["format"] = "json"
        return body

    def options(self, request: ChatRequest) -> Dict[str, Any]:
        options: Dict[str, Any] = {"num_predict": request.max_tokens or self.config.max_output_tokens}
        for attr, name in OPTION_FIELDS:
            value = getattr(request, attr)
            if value is not None:
                options[name] = value
        return options

    def transform_message(self, message: ChatMessage) -> Dict[str, Any]:
        data: Dict[str, Any] = {"role": message.role, "content": message.text_or_joined("\n")}
        images = message_images(message)
        if images:
            data["images"] = images
        if message.tool_calls:
            data["tool_calls"] = [
                {"function": {"name": c.function.name, "arguments": load_json_args(c.function.arguments)}}
                for c in message.tool_calls
            ]
        return data


__all__ = ["OllamaChatTranslator", "message_images"]
