"""Caller-supplied stream callbacks.

Each callback may be a plain function or a coroutine function.

* ``chunk(response)`` receives the canonical view of the buffer after every
  chunk (``response.raw`` is the raw chunk text);
* ``done(response)`` receives the final response;
* ``error(err)`` receives the :class:`NormalizedError`.

``done`` and ``error`` are mutually exclusive and fire at most once.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

Callback = Callable[[Any], Any]


@dataclass
class StreamHandlers:
    chunk: Optional[Callback] = None
    done: Optional[Callback] = None
    error: Optional[Callback] = None

    @classmethod
    def coerce(cls, handlers: Union["StreamHandlers", Mapping[str, Callback], None]) -> "StreamHandlers":
        if handlers is None:
            return cls()
        if isinstance(handlers, StreamHandlers):
            return handlers
        return cls(chunk=handlers.get("chunk"), done=handlers.get("done"), error=handlers.get("error"))


async def invoke(callback: Optional[Callback], value: Any) -> None:
    """Call ``callback(value)`` and await the result when it is awaitable."""
    if callback is None:
        return
    result = callback(value)
    if inspect.isawaitable(result):
        await result


__all__ = ["StreamHandlers", "invoke"]
