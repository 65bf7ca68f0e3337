"""DTO validation package for inbound chat payloads."""

from .chat import Role, ContentPartDTO, ChatMessageDTO, ToolCallDTO, ToolDTO, ChatRequestDTO, parse_chat_request

__all__ = [
    "Role",
    "ContentPartDTO",
    "ChatMessageDTO",
    "ToolCallDTO",
    "ToolDTO",
    "ChatRequestDTO",
    "parse_chat_request",
]
