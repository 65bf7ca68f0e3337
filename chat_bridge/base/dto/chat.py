"""
Pydantic DTOs validating inbound chat payloads before they reach adapters.

Purpose
-------
User-supplied dictionaries are validated here and then converted into the
canonical dataclasses of :mod:`chat_bridge.base.models`. Adapters never see
unvalidated input when callers go through :func:`parse_chat_request`.

External dependencies: Pydantic v2 only. The DTOs raise
``pydantic.ValidationError``; :func:`parse_chat_request` surfaces it as a
:class:`ProviderError` with ``ErrorCode.VALIDATION``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import ErrorCode, ProviderError
from ..models import ChatRequest

Role = Literal["system", "user", "assistant", "tool", "function"]


class ImageUrlDTO(BaseModel):
    url: str = Field(..., min_length=1)


class ContentPartDTO(BaseModel):
    """One structured content part (text, image URL or file)."""

    type: Literal["text", "image_url", "file"]
    text: Optional[str] = None
    image_url: Optional[Union[ImageUrlDTO, str]] = None
    file: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _validate_payload(self) -> "ContentPartDTO":
        if self.type == "text" and self.text is None:
            raise ValueError("text part requires 'text'")
        if self.type == "image_url" and not self.image_url:
            raise ValueError("image_url part requires 'image_url'")
        if self.type == "file" and not self.file:
            raise ValueError("file part requires 'file'")
        return self


class FunctionCallDTO(BaseModel):
    name: str = ""
    arguments: str = ""


class ToolCallDTO(BaseModel):
    id: str = ""
    type: Literal["function"] = "function"
    function: FunctionCallDTO = Field(default_factory=FunctionCallDTO)


class ChatMessageDTO(BaseModel):
    """A chat message.

    Rules:
        - ``content`` may be ``None`` only for assistant turns carrying
          ``tool_calls``.
        - ``tool`` messages require ``tool_call_id``.
    """

    role: Role
    content: Union[str, List[ContentPartDTO], None] = ""
    name: Optional[str] = None
    tool_calls: Optional[List[ToolCallDTO]] = None
    tool_call_id: Optional[str] = None
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def _validate_content(self) -> "ChatMessageDTO":
        if self.content is None and not (self.role == "assistant" and self.tool_calls):
            raise ValueError("content may only be null on assistant tool-call turns")
        if self.role == "tool" and not self.tool_call_id:
            raise ValueError("tool messages require 'tool_call_id'")
        return self


class ToolFunctionDTO(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


class ToolDTO(BaseModel):
    type: Literal["function"] = "function"
    function: ToolFunctionDTO


class ChatRequestDTO(BaseModel):
    """Validated chat request.

    Numeric knobs are range-checked; unknown keys are kept and travel in
    ``ChatRequest.extra`` as provider passthrough values.

    Raises:
        ValidationError: On invalid roles, empty message lists or
        out-of-range parameters.
    """

    model_config = ConfigDict(extra="allow")

    messages: List[ChatMessageDTO] = Field(..., min_length=1)
    model: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    stream: bool = False
    tools: Optional[List[ToolDTO]] = None
    tool_choice: Union[str, Dict[str, Any], None] = None
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)

    def to_request(self) -> ChatRequest:
        """Convert into the canonical :class:`ChatRequest` dataclass."""
        return ChatRequest.from_dict(self.model_dump())


def parse_chat_request(
    data: Union[Mapping[str, Any], ChatRequest], *, provider: str = "chat_bridge"
) -> ChatRequest:
    """Validate ``data`` and return a canonical request (dataclasses pass through).

    Raises:
        ProviderError: ``ErrorCode.VALIDATION`` with the field errors in
        ``details["errors"]``.
    """
    if isinstance(data, ChatRequest):
        return data
    try:
        dto = ChatRequestDTO.model_validate(dict(data))
    except ValidationError as e:
        errors = [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()]
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message=str(e),
            provider=provider,
            raw=e,
            details={"errors": errors},
        ) from e
    return dto.to_request()


__all__ = [
    "Role",
    "ContentPartDTO",
    "ChatMessageDTO",
    "ToolCallDTO",
    "ToolDTO",
    "ChatRequestDTO",
    "parse_chat_request",
]
