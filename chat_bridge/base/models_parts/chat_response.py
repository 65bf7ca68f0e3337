"""
Canonical chat completion response (OpenAI-shaped).

Response translators build a plain dict buffer while parsing provider payloads
and convert it once through :meth:`ChatCompletionResponse.from_dict`. A
response carrying ``error`` is a failure regardless of its other fields.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..errors_parts.normalized_error import NormalizedError
from .message import ChatMessage


@dataclass
class Usage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Usage":
        data = data or {}
        return cls(
            prompt_tokens=int(data.get("prompt_tokens") or 0),
            completion_tokens=int(data.get("completion_tokens") or 0),
            total_tokens=int(data.get("total_tokens") or 0),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass
class Choice:
    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "message": self.message.to_dict(), "finish_reason": self.finish_reason}


@dataclass
class ChatCompletionResponse:
    """Canonical response returned by every adapter.

    Attributes:
        id: Provider response id (first one seen during streaming).
        object: Always ``"chat.completion"``.
        created: Unix timestamp (``0`` when the provider omits it).
        model: Model id reported by the provider.
        choices: Completion choices.
        usage: Token accounting.
        error: Normalized error when the provider reported a failure.
        extra: Provider-specific fields without a canonical slot.
        raw: The untranslated provider payload.
    """

    id: str = ""
    object: str = "chat.completion"
    created: int = 0
    model: Optional[str] = None
    choices: List[Choice] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)
    error: Optional[NormalizedError] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Any = None

    @property
    def content(self) -> str:
        """Text of the first choice (empty string when absent)."""
        if not self.choices:
            return ""
        return self.choices[0].message.text_or_joined()

    @classmethod
    def from_error(cls, error: NormalizedError, raw: Any = None) -> "ChatCompletionResponse":
        return cls(error=error, raw=raw)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], raw: Any = None) -> "ChatCompletionResponse":
        choices = []
        for i, ch in enumerate(data.get("choices") or []):
            msg = ch.get("message") or ch.get("delta") or {}
            index = ch.get("index")
            choices.append(
                Choice(
                    index=index if isinstance(index, int) else i,
                    message=ChatMessage.from_dict({"role": "assistant", **msg}),
                    finish_reason=ch.get("finish_reason"),
                )
            )
        return cls(
            id=str(data.get("id") or ""),
            object=data.get("object") or "chat.completion",
            created=int(data.get("created") or 0),
            model=data.get("model") or None,
            choices=choices,
            usage=Usage.from_dict(data.get("usage")),
            extra=dict(data.get("extra") or {}),
            raw=raw,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "object": self.object,
            "created": self.created,
            "model": self.model,
            "choices": [c.to_dict() for c in self.choices],
            "usage": self.usage.to_dict(),
        }
        if self.error is not None:
            data["error"] = self.error.to_dict()
        if self.extra:
            data.update(self.extra)
        return data


__all__ = ["ChatCompletionResponse", "Choice", "Usage"]
