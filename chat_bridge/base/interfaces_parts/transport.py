"""Transport collaborator Protocols (single-concern module).

The core never opens sockets. It needs a buffered ``request`` returning an
object exposing ``json()``, ``text()``, ``status()`` and ``headers()``, and a
streaming source that yields raw chunk text and can be closed early.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Mapping, Optional, Protocol, runtime_checkable

from ..models import TransportRequest


@runtime_checkable
class TransportResponseLike(Protocol):
    def json(self) -> Any: ...

    def text(self) -> str: ...

    def status(self) -> int: ...

    def headers(self) -> Mapping[str, str]: ...


@runtime_checkable
class StreamSource(Protocol):
    """One open network stream.

    ``stream()`` yields raw chunk strings in arrival order and raises
    :class:`~chat_bridge.base.errors.ProviderError` on transport or HTTP
    failure. ``end()`` forcibly closes the connection.
    """

    def stream(self) -> AsyncIterator[str]: ...

    async def end(self) -> None: ...


@runtime_checkable
class Transport(Protocol):
    async def request(self, request: TransportRequest) -> TransportResponseLike:
        """Perform a buffered request.

        HTTP error statuses are returned (not raised) so translators can read
        the provider error payload; network failures raise ``ProviderError``.
        """
        ...

    def open_stream(self, request: TransportRequest, splitting_regex: Optional[str] = None) -> StreamSource:
        """Prepare (without starting) a streaming request."""
        ...


__all__ = ["Transport", "TransportResponseLike", "StreamSource"]
