"""
Tool and tool-call DTOs (OpenAI function-calling shape).

``FunctionCall.arguments`` is a JSON-encoded string. While a stream is still
open it holds concatenated fragments and is not guaranteed to parse; only the
finalized response carries a complete document.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass
class ToolFunction:
    """Function declaration exposed to the model."""

    name: str
    description: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            data["description"] = self.description
        if self.parameters:
            data["parameters"] = self.parameters
        return data


@dataclass
class Tool:
    """A callable tool offered in a request."""

    function: ToolFunction
    type: str = "function"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tool":
        fn = data.get("function") or {}
        return cls(
            type=data.get("type", "function"),
            function=ToolFunction(
                name=fn.get("name", ""),
                description=fn.get("description"),
                parameters=dict(fn.get("parameters") or {}),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "function": self.function.to_dict()}


@dataclass
class FunctionCall:
    name: str = ""
    arguments: str = ""


@dataclass
class ToolCall:
    """A tool invocation emitted by the assistant."""

    id: str = ""
    type: str = "function"
    function: FunctionCall = field(default_factory=FunctionCall)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ToolCall":
        fn = data.get("function") or {}
        args = fn.get("arguments", "")
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "function",
            function=FunctionCall(name=fn.get("name") or "", arguments=args if isinstance(args, str) else ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": {"name": self.function.name, "arguments": self.function.arguments},
        }


__all__ = ["Tool", "ToolFunction", "ToolCall", "FunctionCall"]
