"""
ChatRequest DTO for provider-agnostic chat invocations.

Request translators map this canonical (OpenAI-shaped) request to each
provider's wire format. ``extra`` is the escape hatch for provider passthrough
keys such as Cohere's ``preamble`` or ``documents``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from .message import ChatMessage
from .tool import Tool

_KNOWN_KEYS = (
    "messages",
    "model",
    "temperature",
    "max_tokens",
    "stream",
    "tools",
    "tool_choice",
    "top_p",
    "presence_penalty",
    "frequency_penalty",
)


@dataclass
class ChatRequest:
    """Canonical chat request.

    Attributes:
        messages: Ordered list of :class:`ChatMessage`.
        model: Target model id; adapters fall back to their configured model.
        temperature: Sampling temperature.
        max_tokens: Completion token cap; adapters fall back to their default.
        stream: Whether the caller wants an incremental response.
        tools: Optional tool declarations.
        tool_choice: ``"auto"``, ``"none"``, ``"required"`` or
            ``{"type": "function", "function": {"name": ...}}``.
        top_p / presence_penalty / frequency_penalty: Optional sampling knobs.
        extra: Provider passthrough keys.
    """

    messages: List[ChatMessage] = field(default_factory=list)
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    stream: bool = False
    tools: Optional[List[Tool]] = None
    tool_choice: Union[str, Dict[str, Any], None] = None
    top_p: Optional[float] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatRequest":
        tools = data.get("tools")
        return cls(
            messages=[ChatMessage.from_dict(m) for m in data.get("messages") or []],
            model=data.get("model"),
            temperature=data.get("temperature"),
            max_tokens=data.get("max_tokens"),
            stream=bool(data.get("stream", False)),
            tools=[Tool.from_dict(t) for t in tools] if tools else None,
            tool_choice=data.get("tool_choice"),
            top_p=data.get("top_p"),
            presence_penalty=data.get("presence_penalty"),
            frequency_penalty=data.get("frequency_penalty"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def forced_tool_name(self) -> Optional[str]:
        """Return the function name when ``tool_choice`` pins a specific tool."""
        if isinstance(self.tool_choice, Mapping):
            fn = self.tool_choice.get("function") or {}
            return fn.get("name")
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the request."""
        data: Dict[str, Any] = {
            "messages": [m.to_dict() for m in self.messages],
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "stream": self.stream,
            "tools": [t.to_dict() for t in self.tools] if self.tools else None,
            "tool_choice": self.tool_choice,
            "top_p": self.top_p,
            "presence_penalty": self.presence_penalty,
            "frequency_penalty": self.frequency_penalty,
        }
        data.update(self.extra)
        return data


__all__ = ["ChatRequest"]
