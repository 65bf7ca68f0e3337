"""OpenAI request translation.

The canonical request is already OpenAI-shaped. The one platform quirk is the
``o1-`` model family, which rejects system messages and ``temperature``.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import ChatRequest
from ..base.translation import OpenAIRequestTranslator

REASONING_PREFIX = "o1-"


class OpenAIChatTranslator(OpenAIRequestTranslator):
    def to_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        body = super().to_body(request, stream)
        if str(body.get("model") or "").startswith(REASONING_PREFIX):
            body["messages"] = [m for m in body["messages"] if m.get("role") != "system"]
            body.pop("temperature", None)
        return body


__all__ = ["OpenAIChatTranslator", "REASONING_PREFIX"]
