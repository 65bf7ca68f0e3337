"""
ChatMessage DTO used across providers.

Content may be plain text, a list of :class:`ContentPart` objects, or ``None``
(assistant turns that only carry tool calls). Message order is significant and
is preserved verbatim by every translator.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from .content_part import ContentPart
from .tool import ToolCall

Role = Literal["system", "user", "assistant", "tool", "function"]


@dataclass
class ChatMessage:
    """A canonical chat message.

    Attributes:
        role: Author role.
        content: Text, structured parts, or ``None``.
        name: Optional author / function name.
        tool_calls: Tool invocations requested by an assistant turn.
        tool_call_id: Identifier of the call a ``tool`` message answers.
        image_url: Legacy single-image attachment.
    """

    role: Role
    content: Union[str, List[ContentPart], None] = ""
    name: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None
    image_url: Optional[str] = None

    def is_structured(self) -> bool:
        return isinstance(self.content, list)

    def text_or_joined(self, sep: str = "\n") -> str:
        """Return content as text, joining the text parts of structured content."""
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        return sep.join(p.text for p in self.content if p.type == "text" and p.text)

    def parts(self) -> List[ContentPart]:
        """Return content as a list of parts (plain text becomes one text part)."""
        if isinstance(self.content, list):
            return list(self.content)
        if self.content:
            return [ContentPart(type="text", text=self.content)]
        return []

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatMessage":
        content = data.get("content")
        if isinstance(content, list):
            content = [ContentPart.from_dict(p) for p in content]
        tool_calls = data.get("tool_calls")
        return cls(
            role=data.get("role", "user"),
            content=content,
            name=data.get("name"),
            tool_calls=[ToolCall.from_dict(tc) for tc in tool_calls] if tool_calls else None,
            tool_call_id=data.get("tool_call_id"),
            image_url=data.get("image_url"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI wire shape, omitting unset optional fields."""
        content: Any = self.content
        if isinstance(content, list):
            content = [p.to_dict() for p in content]
        data: Dict[str, Any] = {"role": self.role, "content": content}
        if self.name:
            data["name"] = self.name
        if self.tool_calls:
            data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.tool_call_id:
            data["tool_call_id"] = self.tool_call_id
        if self.image_url:
            data["image_url"] = self.image_url
        return data


__all__ = ["ChatMessage", "Role"]
