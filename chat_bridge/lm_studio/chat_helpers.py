"""LM Studio request translation.

LM Studio only understands string ``tool_choice`` values. A pinned tool is
requested in the prompt and ``tool_choice`` becomes ``"required"``; any other
object form falls back to ``"auto"``. Without tools nothing is pinned.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import ChatRequest
from ..base.translation import OpenAIRequestTranslator


class LmStudioChatTranslator(OpenAIRequestTranslator):
    def to_body(self, request: ChatRequest, stream: bool) -> Dict[str, Any]:
        body = super().to_body(request, stream)
        forced = request.forced_tool_name()
        if forced and request.tools and body["messages"]:
            last = body["messages"][-1]
            if not isinstance(last.get("content"), list):
                last["content"] = [{"type": "text", "text": last.get("content") or ""}]
            last["content"].append({"type": "text", "text": f'Use the "{forced}" tool.'})
            body["tool_choice"] = "required"
        elif isinstance(body.get("tool_choice"), dict):
            body["tool_choice"] = "auto"
        return body


__all__ = ["LmStudioChatTranslator"]
