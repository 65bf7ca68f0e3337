"""Canonical schema public surface.

Re-exports the implementations under ``chat_bridge.base.models_parts`` so
callers have one stable import path.
"""

from .models_parts import (
    ContentPart,
    ContentPartType,
    Tool,
    ToolFunction,
    ToolCall,
    FunctionCall,
    ChatMessage,
    Role,
    ChatRequest,
    ChatCompletionResponse,
    Choice,
    Usage,
    ModelInfo,
    ModelOption,
    TransportRequest,
    ProviderConfig,
)

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
