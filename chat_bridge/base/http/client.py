"""Shared async HTTP client pool.

Purpose:
    Reuse ``httpx.AsyncClient`` instances across adapters instead of opening a
    connection pool per call. Clients are keyed by ``purpose`` ("chat",
    "stream", "catalog") and by the running event loop, since an
    ``AsyncClient`` cannot outlive the loop it was first used on.

Lifecycle & cleanup:
    Entries for closed loops are dropped on the next lookup. Applications and
    tests may call :func:`close_all_clients` from the owning loop.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Tuple

import httpx

from ..timeouts import as_httpx_timeout

_CLIENTS: Dict[Tuple[str, int], Tuple[asyncio.AbstractEventLoop, httpx.AsyncClient]] = {}


def _prune_closed_loops() -> None:
    for key, (loop, _client) in list(_CLIENTS.items()):
        if loop.is_closed():
            _CLIENTS.pop(key, None)


def get_httpx_client(purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for ``purpose`` on the running loop.

    Must be called from within a coroutine.
    """
    loop = asyncio.get_running_loop()
    _prune_closed_loops()
    key = (purpose, id(loop))
    entry = _CLIENTS.get(key)
    if entry is not None and not entry[1].is_closed:
        return entry[1]
    client = httpx.AsyncClient(timeout=as_httpx_timeout(purpose))
    _CLIENTS[key] = (loop, client)
    return client


async def close_all_clients() -> None:
    """Close and forget the pooled clients owned by the running loop."""
    loop = asyncio.get_running_loop()
    for key, (owner, client) in list(_CLIENTS.items()):
        if owner is loop:
            await client.aclose()
            _CLIENTS.pop(key, None)


__all__ = ["get_httpx_client", "close_all_clients"]
