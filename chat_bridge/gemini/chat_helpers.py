"""Gemini ``generateContent`` request translation.

- The key travels in the URL query (``api_key_header="none"``); the model is
  part of the path.
- System text is collected and sent as the first user turn.
- Roles map assistant/function to ``model``; tool results are sent as
  ``functionResponse`` parts on a user turn.
- Images and PDFs become ``inline_data`` parts (``image/jpg`` is rewritten to
  ``image/jpeg``, which the API requires). Only data URLs can be inlined;
  remote image URLs raise :class:`CapabilityError`.
- Tools become one ``function_declarations`` block; unless ``tool_choice`` is
  ``"none"`` the model is forced to call one of them (mode ``ANY``).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from ..base.errors import CapabilityError
from ..base.models import ChatMessage, ChatRequest, ContentPart, TransportRequest
from ..base.translation import OpenAIRequestTranslator, TranslationContext, is_number, load_json_args, parse_data_url
from ..config.defaults import GEMINI_BASE_URL

ROLE_MAP = {"user": "user", "assistant": "model", "function": "model"}

REMOTE_IMAGE_UNSUPPORTED = "Gemini only accepts inline (data: URL) images"

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


def model_url(ctx: TranslationContext, model: str, action: str) -> str:
    """``{base}/models/{model}:{action}?key=...`` (no query without a key)."""
    base = (ctx.base_url or GEMINI_BASE_URL).rstrip("/")
    url = f"{base}/models/{model}:{action}"
    if ctx.api_key:
        url += "?" + urlencode({"key": ctx.api_key})
    return url


def inline_part(part: ContentPart) -> Optional[Dict[str, Any]]:
    if part.type == "text":
        return {"text": part.text or ""}
    if part.type == "image_url":
        mime, data = parse_data_url(part.image_url)
        if data is None:
            return None
        if mime == "image/jpg":
            mime = "image/jpeg"
        return {"inline_data": {"mime_type": mime, "data": data}}
    filename = str(part.file.get("filename") or "")
    if filename.lower().endswith(".pdf") and part.file.get("file_data"):
        _, data = parse_data_url(part.file["file_data"])
        return {"inline_data": {"mime_type": "application/pdf", "data": data}}
    return None


def message_parts(message: ChatMessage) -> List[Dict[str, Any]]:
    if isinstance(message.content, list):
        return [p for p in (inline_part(part) for part in message.content) if p is not None]
    return [{"text": message.content or ""}]


def gemini_content(message: ChatMessage) -> Dict[str, Any]:
    """One ``contents`` entry for a non-system message."""
    if message.role == "tool":
        return {
            "role": "user",
            "parts": [
                {
                    "functionResponse": {
                        "name": message.name or message.tool_call_id or "",
                        "response": {"content": message.text_or_joined()},
                    }
                }
            ],
        }
    parts = message_parts(message) if message.content else []
    for call in message.tool_calls or []:
        parts.append({"functionCall": {"name": call.function.name, "args": load_json_args(call.function.arguments)}})
    return {"role": ROLE_MAP.get(message.role, message.role), "parts": parts or [{"text": ""}]}


class GeminiChatTranslator(OpenAIRequestTranslator):
    def to_platform(self, request: ChatRequest, stream: bool = False) -> TransportRequest:
        model = request.model or self.ctx.model
        action = "streamGenerateContent" if stream else "generateContent"
        return TransportRequest(
            url=model_url(self.ctx, model, action),
            method="POST",
            headers=self.headers(),
            body=json.dumps(self.to_body(request, stream)),
        )

    def to_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        self.ensure_supported(request)
        extra = request.extra
        generation: Dict[str, Any] = {
            "maxOutputTokens": request.max_tokens or self.config.max_output_tokens,
            "topK": extra.get("topK") or 1,
            "topP": request.top_p if is_number(request.top_p) else extra.get("topP") or 1,
            "stopSequences": extra.get("stop") or [],
        }
        if request.temperature is not None:
            generation["temperature"] = request.temperature
        body: Dict[str, Any] = {
            "contents": self.transform_messages(request.messages),
            "generationConfig": generation,
            "safetySettings": [{"category": c, "threshold": "BLOCK_NONE"} for c in SAFETY_CATEGORIES],
        }
        if request.tools:
            body["tools"] = [{"function_declarations": [t.function.to_dict() for t in request.tools]}]
            if request.tool_choice != "none":
                body["tool_config"] = {
                    "function_calling_config": {
                        "mode": "ANY",
                        "allowed_function_names": [t.function.name for t in request.tools],
                    }
                }
        return body

    def ensure_supported(self, request: ChatRequest) -> None:
        for message in request.messages:
            for part in message.parts():
                if part.type == "image_url" and parse_data_url(part.image_url)[1] is None:
                    raise CapabilityError(message=REMOTE_IMAGE_UNSUPPORTED, provider=self.config.key, model=request.model)

    def transform_messages(self, messages: List[ChatMessage]) -> List[Dict[str, Any]]:
        contents: List[Dict[str, Any]] = []
        system: List[str] = []
        for message in messages:
            if message.role == "system":
                system.append(message.text_or_joined())
            else:
                contents.append(self.transform_message(message))
        if system:
            contents.insert(0, {"role": "user", "parts": [{"text": "\n".join(system).strip()}]})
        return contents

    def transform_message(self, message: ChatMessage) -> Dict[str, Any]:
        return gemini_content(message)


def token_count_body(value: Any) -> Dict[str, Any]:
    """Body for ``:countTokens`` from a string, message(s) or request."""
    if isinstance(value, str):
        return {"contents": [{"parts": [{"text": value}]}]}
    if isinstance(value, ChatRequest):
        value = value.messages
    if isinstance(value, dict):
        value = ChatMessage.from_dict(value)
    if isinstance(value, ChatMessage):
        value = [value]
    return {"contents": [gemini_content(m if isinstance(m, ChatMessage) else ChatMessage.from_dict(m)) for m in value]}


__all__ = ["GeminiChatTranslator", "model_url", "token_count_body", "SAFETY_CATEGORIES"]
