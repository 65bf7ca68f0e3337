"""Capability Protocols composed by provider adapters.

A provider is assembled from small capability implementations instead of an
inheritance chain: something that can be loaded, something that translates
requests, something that translates (and accumulates) responses, and
something that streams.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from ..models import ChatCompletionResponse, ChatRequest, TransportRequest


@runtime_checkable
class Loadable(Protocol):
    state: Any

    async def load(self) -> None: ...

    async def unload(self) -> None: ...


@runtime_checkable
class RequestTranslatable(Protocol):
    def to_platform(self, request: ChatRequest, stream: bool = False) -> TransportRequest:
        """Return the provider wire request for a canonical request."""
        ...


@runtime_checkable
class ResponseTranslatable(Protocol):
    def to_openai(self, platform_res: Any, status: Optional[int] = None) -> ChatCompletionResponse:
        """Translate a buffered provider payload to the canonical response."""
        ...

    def is_end_of_stream(self, chunk: str) -> bool:
        """Return True when ``chunk`` marks the end of the stream."""
        ...

    def handle_chunk(self, chunk: str) -> None:
        """Merge one raw stream chunk into the accumulation buffer."""
        ...

    def finalize(self) -> ChatCompletionResponse:
        """Translate the accumulation buffer to the canonical response."""
        ...

    def snapshot(self) -> ChatCompletionResponse:
        """Return the canonical view of the partial buffer after the last chunk."""
        ...


@runtime_checkable
class Streamable(Protocol):
    async def stream(self, request: ChatRequest, handlers: Any = None) -> ChatCompletionResponse: ...

    def stop_stream(self) -> None: ...


__all__ = ["Loadable", "RequestTranslatable", "ResponseTranslatable", "Streamable"]
