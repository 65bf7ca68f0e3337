"""Streaming controller.

One controller belongs to one adapter and runs at most one stream at a time.
A stream is an ``asyncio.Task`` that iterates the transport's raw chunks in
arrival order and feeds them to that request's response translator.

Generation guard
    Every ``start`` and every ``stop`` bumps ``generation``. A run captures the
    generation it was started with and checks it before invoking any handler,
    so callbacks still in flight for a stopped stream are suppressed.

Terminal delivery
    Exactly one of ``handlers.done`` / ``handlers.error`` fires for a stream
    that runs to completion. The stream is done when the provider's
    end-of-stream predicate matches (the terminal chunk is still handed to the
    translator, which ignores sentinels) or when the connection closes. A
    chunk that fails to parse, a transport failure, or an error payload in the
    stream are normalized and delivered through ``error``; the partial buffer
    stays available through :meth:`StreamRun.partial` but is never delivered
    as a success. A stopped stream fires neither. A caller cancelled while
    waiting stops its stream, so the controller is free for the next one.
"""
from __future__ import annotations

import asyncio
import logging
import weakref
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any, Optional, Set

from ..errors import ErrorCode, NormalizedError, ProviderError, StreamBusyError, classify_exception, normalize_error
from ..interfaces import ResponseTranslatable, StreamSource, Transport
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import ChatCompletionResponse, TransportRequest
from .stream_handlers import StreamHandlers, invoke
from .stream_state import ACTIVE_STATES, StreamState

_logger = get_logger("chat_bridge.stream")


@dataclass
class StreamRun:
    """Handle for one started stream."""

    generation: int
    task: "asyncio.Task[ChatCompletionResponse]"
    translator: ResponseTranslatable
    source: StreamSource

    def partial(self) -> ChatCompletionResponse:
        """Canonical view of whatever was accumulated so far."""
        return self.translator.snapshot()


class StreamController:
    """Owns the single active stream of an adapter."""

    def __init__(
        self,
        transport: Transport,
        *,
        provider: str = "unknown",
        splitting_regex: Optional[str] = None,
    ) -> None:
        self._transport = transport
        self._provider = provider
        self._splitting_regex = splitting_regex
        self._state = StreamState.IDLE
        self._generation = 0
        self._run: Optional[StreamRun] = None
        self._stopped: "weakref.WeakSet[asyncio.Task]" = weakref.WeakSet()
        self._closing: Set[asyncio.Task] = set()

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def active(self) -> bool:
        return self._state in ACTIVE_STATES

    @property
    def current(self) -> Optional[StreamRun]:
        return self._run

    def start(
        self,
        request: TransportRequest,
        translator: ResponseTranslatable,
        handlers: Any = None,
        *,
        model: Optional[str] = None,
    ) -> StreamRun:
        """Open the stream and schedule its processing task.

        Raises:
            StreamBusyError: when a previous stream is still open.
        """
        if self.active:
            raise StreamBusyError(provider=self._provider, model=model)
        self._generation += 1
        generation = self._generation
        source = self._transport.open_stream(request, self._splitting_regex)
        self._state = StreamState.OPEN
        ctx = LogContext(provider=self._provider, model=model, stream_id=generation)
        task = asyncio.ensure_future(
            self._consume(generation, source, translator, StreamHandlers.coerce(handlers), ctx)
        )
        self._run = StreamRun(generation=generation, task=task, translator=translator, source=source)
        normalized_log_event(_logger, "stream.start", ctx, phase="start", emitted=False)
        return self._run

    async def wait(self, run: StreamRun) -> ChatCompletionResponse:
        """Await a run; a stopped run resolves to its partial response."""
        try:
            return await run.task
        except asyncio.CancelledError:
            if run.task in self._stopped:
                return run.partial()
            if self._run is run:
                self.stop()
            raise

    def stop(self) -> None:
        """Close the active stream and suppress its pending handlers."""
        run = self._run
        if run is None:
            return
        self._generation += 1
        self._run = None
        was_active = self.active
        self._state = StreamState.IDLE
        if not run.task.done():
            self._stopped.add(run.task)
            run.task.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            closing = loop.create_task(run.source.end())
            self._closing.add(closing)
            closing.add_done_callback(self._closed)
        if was_active:
            normalized_log_event(
                _logger,
                "stream.cancelled",
                LogContext(provider=self._provider, stream_id=run.generation),
                phase="finalize",
                error_code=ErrorCode.CANCELLED.value,
            )

    def _closed(self, task: "asyncio.Task[None]") -> None:
        self._closing.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_event(
                _logger,
                "stream.close_failed",
                level=logging.WARNING,
                provider=self._provider,
                error=str(exc) or type(exc).__name__,
            )

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _consume(
        self,
        generation: int,
        source: StreamSource,
        translator: ResponseTranslatable,
        handlers: StreamHandlers,
        ctx: LogContext,
    ) -> ChatCompletionResponse:
        emitted = 0
        try:
            async with aclosing(source.stream()) as chunks:
                async for chunk in chunks:
                    if not self._is_current(generation):
                        break
                    if self._state is StreamState.OPEN:
                        self._state = StreamState.ACCUMULATING
                    if translator.is_end_of_stream(chunk):
                        translator.handle_chunk(chunk)
                        break
                    translator.handle_chunk(chunk)
                    emitted += 1
                    if self._is_current(generation):
                        view = translator.snapshot()
                        view.raw = chunk
                        await invoke(handlers.chunk, view)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # malformed chunk, transport failure, handler failure
            return await self._fail(generation, normalize_error(exc), classify_exception(exc), handlers, ctx, emitted)

        final = translator.finalize()
        if final.error is not None:
            return await self._fail(generation, final.error, None, handlers, ctx, emitted)
        if self._is_current(generation):
            self._state = StreamState.DONE
            normalized_log_event(
                _logger,
                "stream.end",
                ctx,
                phase="finalize",
                emitted=emitted,
                tokens=final.usage,
            )
            await invoke(handlers.done, final)
        return final

    async def _fail(
        self,
        generation: int,
        error: NormalizedError,
        code: Optional[ErrorCode],
        handlers: StreamHandlers,
        ctx: LogContext,
        emitted: int,
    ) -> ChatCompletionResponse:
        exc = ProviderError.from_normalized(error, provider=self._provider, model=ctx.model, code=code)
        if self._is_current(generation):
            self._state = StreamState.ERROR
            await self._end_quietly(generation)
            normalized_log_event(
                _logger,
                "stream.error",
                ctx,
                phase="finalize",
                level=logging.WARNING,
                error_code=exc.code.value,
                emitted=emitted,
                error=error.message,
            )
            await invoke(handlers.error, error)
        raise exc

    async def _end_quietly(self, generation: int) -> None:
        run = self._run
        if run is not None and run.generation == generation:
            await run.source.end()


__all__ = ["StreamController", "StreamRun"]
