"""httpx-backed transport collaborator.

``HttpxTransport.request`` performs buffered calls and wraps the
``httpx.Response`` in :class:`HttpxResponse` (``json()``, ``text()``,
``status()``, ``headers()``). ``open_stream`` returns an
:class:`HttpxStreamSource` that yields raw chunks:

* line framing (SSE ``data:`` lines, NDJSON) by default, blank lines skipped;
* regex framing when the provider declares a splitting pattern, in which case
  text is buffered and split, and the trailing remainder is flushed at EOF.

Network failures are converted to :class:`ProviderError` here so the rest of
the package never sees raw ``httpx`` exceptions. HTTP error statuses on a
stream are raised as ``ProviderError`` carrying the normalized body.
"""

from __future__ import annotations

import json
import re
from typing import Any, AsyncIterator, Mapping, Optional

import httpx

from ..errors import ErrorCode, ProviderError, classify_exception, classify_status, normalize_error
from ..models import TransportRequest
from .client import get_httpx_client


def _transport_error(exc: httpx.HTTPError, url: str) -> ProviderError:
    status = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
    return ProviderError(
        code=classify_exception(exc),
        message=str(exc) or type(exc).__name__,
        provider="transport",
        retryable=True,
        raw=exc,
        details={"url": url},
        http_status=status,
    )


class HttpxResponse:
    """Adapter exposing the transport response contract over ``httpx.Response``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    def json(self) -> Any:
        return self._response.json()

    def text(self) -> str:
        return self._response.text

    def status(self) -> int:
        return self._response.status_code

    def headers(self) -> Mapping[str, str]:
        return dict(self._response.headers)


class HttpxStreamSource:
    """A single streaming HTTP request."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient],
        request: TransportRequest,
        splitting_regex: Optional[str] = None,
    ) -> None:
        self._client = client
        self._request = request
        self._pattern = re.compile(splitting_regex) if splitting_regex else None
        self._response: Optional[httpx.Response] = None
        self._ended = False

    async def stream(self) -> AsyncIterator[str]:
        client = self._client or get_httpx_client("stream")
        req = self._request
        try:
            async with client.stream(req.method, req.url, headers=req.headers, content=req.body) as response:
                self._response = response
                if response.status_code >= 400:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise self._status_error(response.status_code, body)
                if self._pattern is None:
                    async for line in response.aiter_lines():
                        if self._ended:
                            return
                        if line.strip():
                            yield line
                else:
                    async for chunk in self._split(response.aiter_text()):
                        if self._ended:
                            return
                        yield chunk
        except httpx.HTTPError as exc:
            if self._ended:
                return
            raise _transport_error(exc, req.url) from exc

    async def _split(self, texts: AsyncIterator[str]) -> AsyncIterator[str]:
        buffer = ""
        async for text in texts:
            buffer += text
            start = 0
            for match in self._pattern.finditer(buffer):
                piece = buffer[start:match.start()]
                start = match.end()
                if piece.strip():
                    yield piece
            buffer = buffer[start:]
        if buffer.strip():
            yield buffer

    def _status_error(self, status: int, body: str) -> ProviderError:
        try:
            payload: Any = json.loads(body)
        except ValueError:
            payload = body or f"HTTP {status}"
        err = normalize_error(payload, status)
        return ProviderError(
            code=classify_status(status) or ErrorCode.UNKNOWN,
            message=err.message,
            provider="transport",
            details=err.details,
            http_status=status,
            raw=body,
        )

    async def end(self) -> None:
        self._ended = True
        if self._response is not None:
            await self._response.aclose()


class HttpxTransport:
    """Default transport collaborator backed by the pooled ``httpx.AsyncClient``.

    Parameters:
        client: Optional explicit client (tests pass one built on
            ``httpx.MockTransport``). When omitted the shared pool is used.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = client

    async def request(self, request: TransportRequest) -> HttpxResponse:
        client = self._client or get_httpx_client("chat")
        try:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as exc:
            raise _transport_error(exc, request.url) from exc
        return HttpxResponse(response)

    def open_stream(self, request: TransportRequest, splitting_regex: Optional[str] = None) -> HttpxStreamSource:
        return HttpxStreamSource(self._client, request, splitting_regex)


__all__ = ["HttpxTransport", "HttpxResponse", "HttpxStreamSource"]
