"""OpenAI-shaped request translator.

The canonical request already is OpenAI-shaped, so this translator mostly
fills defaults and drops what the wire format must not carry:

* ``model`` falls back to the adapter model, ``max_tokens`` to the provider's
  ``max_output_tokens``;
* ``tools`` is only sent when non-empty, and ``tool_choice`` only alongside
  tools and never as ``"none"``;
* optional sampling knobs are only sent when numeric.

Providers speaking a compatible dialect subclass it and override
``transform_message`` / ``to_body``.
"""
from __future__ import annotations

import json
from typing import Any, Dict

from ..auth import build_auth_headers
from ..models import ChatMessage, ChatRequest, TransportRequest
from .content import is_number
from .context import TranslationContext

OPTIONAL_NUMERIC_PARAMS = ("top_p", "presence_penalty", "frequency_penalty")


class OpenAIRequestTranslator:
    """Canonical request -> OpenAI chat-completions wire request."""

    def __init__(self, ctx: TranslationContext) -> None:
        self.ctx = ctx

    @property
    def config(self):
        return self.ctx.config

    def endpoint(self, stream: bool) -> str:
        if stream and self.config.endpoint_streaming:
            return self.config.endpoint_streaming
        return self.config.endpoint

    def headers(self) -> Dict[str, str]:
        return build_auth_headers(
            self.ctx.api_key,
            self.config.api_key_header,
            {"Content-Type": "application/json", **self.config.extra_headers},
            warn_missing=self.config.api_key_required,
            provider=self.config.key,
        )

    def to_platform(self, request: ChatRequest, stream: bool = False) -> TransportRequest:
        body = self.to_body(request, stream)
        return TransportRequest(
            url=self.endpoint(stream),
            method="POST",
            headers=self.headers(),
            body=json.dumps(body),
        )

    def to_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "messages": [self.transform_message(m) for m in request.messages],
            "model": request.model or self.ctx.model,
            "max_tokens": request.max_tokens or self.config.max_output_tokens,
            "stream": stream,
        }
        if request.temperature is not None:
            body["temperature"] = request.temperature
        if request.tools:
            body["tools"] = [t.to_dict() for t in request.tools]
            if request.tool_choice and request.tool_choice != "none":
                body["tool_choice"] = request.tool_choice
        for name in OPTIONAL_NUMERIC_PARAMS:
            value = getattr(request, name)
            if is_number(value):
                body[name] = value
        return body

    def transform_message(self, message: ChatMessage) -> Dict[str, Any]:
        return message.to_dict()


__all__ = ["OpenAIRequestTranslator", "OPTIONAL_NUMERIC_PARAMS"]
