"""Anthropic Messages API request translation.

Mapping from the canonical request:

- system messages are pulled out and joined with a blank line into ``system``;
- ``tool`` messages become user turns carrying a ``tool_result`` block;
- assistant ``tool_calls`` become ``tool_use`` blocks whose ``input`` is the
  decoded arguments document;
- image parts become ``image`` blocks (base64 for data URLs, ``url`` sources
  otherwise) and PDF file parts become ``document`` blocks;
- tools become ``{name, description, input_schema}``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.models import ChatMessage, ChatRequest, ContentPart
from ..base.translation import OpenAIRequestTranslator, load_json_args, parse_data_url

ROLE_MAP = {"function": "assistant", "tool": "user"}


def image_block(url: Optional[str]) -> Dict[str, Any]:
    mime, data = parse_data_url(url)
    if data is None:
        return {"type": "image", "source": {"type": "url", "url": url}}
    return {"type": "image", "source": {"type": "base64", "media_type": mime, "data": data}}


def content_block(part: ContentPart) -> Optional[Dict[str, Any]]:
    if part.type == "text":
        return {"type": "text", "text": part.text or ""}
    if part.type == "image_url":
        return image_block(part.image_url)
    filename = str(part.file.get("filename") or "")
    if filename.lower().endswith(".pdf") and part.file.get("file_data"):
        _, data = parse_data_url(part.file["file_data"])
        return {
            "type": "document",
            "source": {"type": "base64", "media_type": "application/pdf", "data": data},
        }
    return None


class AnthropicChatTranslator(OpenAIRequestTranslator):
    def to_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": request.model or self.ctx.model,
            "max_tokens": request.max_tokens or self.config.max_output_tokens,
            "stream": stream,
        }
        if request.temperature is not None:
            body["temperature"] = request.temperature
        system: List[str] = []
        messages: List[Dict[str, Any]] = []
        for message in request.messages:
            if message.role == "system":
                system.append(message.text_or_joined("\n"))
            else:
                messages.append(self.transform_message(message))
        if system:
            body["system"] = "\n\n".join(system)
        body["messages"] = messages
        if request.tools:
            body["tools"] = [
                {
                    "name": t.function.name,
                    "description": t.function.description,
                    "input_schema": t.function.parameters or {"type": "object", "properties": {}},
                }
                for t in request.tools
            ]
            choice = self.tool_choice(request)
            if choice is not None:
                body["tool_choice"] = choice
        return body

    @staticmethod
    def tool_choice(request: ChatRequest) -> Optional[Dict[str, Any]]:
        name = request.forced_tool_name()
        if name:
            return {"type": "tool", "name": name}
        if request.tool_choice == "auto":
            return {"type": "auto"}
        if request.tool_choice == "required":
            return {"type": "any"}
        return None

    def transform_message(self, message: ChatMessage) -> Dict[str, Any]:
        if message.role == "tool":
            return {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": message.tool_call_id,
                        "content": message.text_or_joined(),
                    }
                ],
            }
        role = ROLE_MAP.get(message.role, message.role)
        if message.tool_calls:
            blocks: List[Dict[str, Any]] = []
            text = message.text_or_joined()
            if text:
                blocks.append({"type": "text", "text": text})
            for call in message.tool_calls:
                blocks.append(
                    {
                        "type": "tool_use",
                        "id": call.id,
                        "name": call.function.name,
                        "input": load_json_args(call.function.arguments),
                    }
                )
            return {"role": role, "content": blocks}
        if isinstance(message.content, list):
            blocks = [b for b in (content_block(p) for p in message.content) if b is not None]
            return {"role": role, "content": blocks}
        return {"role": role, "content": message.content or ""}


__all__ = ["AnthropicChatTranslator", "content_block", "image_block"]
