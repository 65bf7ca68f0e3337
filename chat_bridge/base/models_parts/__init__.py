"""Canonical model parts package (one class family per file).

Prefer importing from ``chat_bridge.base.models`` for the stable surface.
"""

from .content_part import ContentPart, ContentPartType
from .tool import Tool, ToolFunction, ToolCall, FunctionCall
from .message import ChatMessage, Role
from .chat_request import ChatRequest
from .chat_response import ChatCompletionResponse, Choice, Usage
from .model_info import ModelInfo, ModelOption
from .transport_request import TransportRequest
from .provider_config import ProviderConfig

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Tool",
    "ToolFunction",
    "ToolCall",
    "FunctionCall",
    "ChatMessage",
    "Role",
    "ChatRequest",
    "ChatCompletionResponse",
    "Choice",
    "Usage",
    "ModelInfo",
    "ModelOption",
    "TransportRequest",
    "ProviderConfig",
]
