"""Test doubles shared across the suite: clock, transport, stream source,
registry stub and structured log capture. Nothing here touches the network.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Union

from chat_bridge.base.models import TransportRequest


class FakeClock:
    """Mutable clock returning seconds; ``advance`` moves it forward."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeResponse:
    def __init__(self, payload: Any = None, status: int = 200, text: Optional[str] = None) -> None:
        self._payload = payload
        self._status = status
        self._text = text

    def json(self) -> Any:
        if self._text is not None and self._payload is None:
            return json.loads(self._text)
        return self._payload

    def text(self) -> str:
        if self._text is not None:
            return self._text
        return json.dumps(self._payload)

    def status(self) -> int:
        return self._status

    def headers(self) -> Dict[str, str]:
        return {"content-type": "application/json"}


class FakeStreamSource:
    """Scripted stream: yields ``chunks`` then optionally raises ``error``.

    ``gate`` (an ``asyncio.Event``) pauses the stream after ``pause_after``
    chunks so tests can act while the stream is open.
    """

    def __init__(
        self,
        chunks: List[str],
        *,
        error: Optional[BaseException] = None,
        pause_after: Optional[int] = None,
    ) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.pause_after = pause_after
        self.gate = asyncio.Event()
        self.paused = asyncio.Event()
        self.ended = False

    async def stream(self) -> AsyncIterator[str]:
        for i, chunk in enumerate(self.chunks):
            if self.pause_after is not None and i == self.pause_after:
                self.paused.set()
                await self.gate.wait()
            if self.ended:
                return
            yield chunk
        if self.error is not None:
            raise self.error

    async def end(self) -> None:
        self.ended = True
        self.gate.set()


Reply = Union[FakeResponse, BaseException, Callable[[TransportRequest], FakeResponse]]


class FakeTransport:
    """Transport collaborator answering from per-URL-prefix scripts.

    ``add(prefix, reply)`` queues a reply for requests whose URL starts with
    ``prefix``; the last queued reply for a prefix is reused once the queue is
    down to one. Every request is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.replies: Dict[str, List[Reply]] = {}
        self.requests: List[TransportRequest] = []
        self.streams: List[FakeStreamSource] = []
        self.stream_requests: List[TransportRequest] = []
        self.splitting: List[Optional[str]] = []

    def add(self, prefix: str, reply: Reply) -> "FakeTransport":
        self.replies.setdefault(prefix, []).append(reply)
        return self

    def add_stream(self, source: FakeStreamSource) -> FakeStreamSource:
        self.streams.append(source)
        return source

    async def request(self, request: TransportRequest) -> FakeResponse:
        self.requests.append(request)
        for prefix, queue in sorted(self.replies.items(), key=lambda kv: -len(kv[0])):
            if request.url.startswith(prefix):
                reply = queue.pop(0) if len(queue) > 1 else queue[0]
                if isinstance(reply, BaseException):
                    raise reply
                if callable(reply) and not isinstance(reply, FakeResponse):
                    return reply(request)
                return reply
        return FakeResponse({"error": {"message": f"no reply for {request.url}"}}, status=404)

    def open_stream(self, request: TransportRequest, splitting_regex: Optional[str] = None) -> FakeStreamSource:
        self.stream_requests.append(request)
        self.splitting.append(splitting_regex)
        return self.streams.pop(0)

    def bodies(self) -> List[Any]:
        return [json.loads(r.body) for r in self.requests if r.body]


class FakeRegistry:
    """Registry index stub returning canned ``models`` per provider key."""

    def __init__(self, data: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        self.data = data or {}
        self.calls: List[str] = []

    async def models_for(self, provider_key: str) -> Dict[str, Any]:
        self.calls.append(provider_key)
        return self.data.get(provider_key, {})


class LogCapture:
    def __init__(self) -> None:
        self.records: List[logging.LogRecord] = []

    def events(self, name: Optional[str] = None) -> List[Dict[str, Any]]:
        out = []
        for record in self.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if name is None or payload.get("event") == name:
                out.append({**payload, "levelno": record.levelno})
        return out


def sse(payload: Any) -> str:
    """Format one SSE ``data:`` line."""
    return f"data: {json.dumps(payload)}"
