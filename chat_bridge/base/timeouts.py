"""Timeout configuration for HTTP calls and streams.

TimeoutConfig
    Normalized timeout values (seconds).

get_timeout_config()
    Process-cached configuration, re-read when the environment overrides
    change. Supported variables (all optional, positive floats):
        CHAT_BRIDGE_TIMEOUT_START_SECONDS   connect / first byte
        CHAT_BRIDGE_TIMEOUT_HTTP_SECONDS    buffered request
        CHAT_BRIDGE_TIMEOUT_STREAM_SECONDS  idle time between stream chunks

as_httpx_timeout(purpose)
    Translate the config into an ``httpx.Timeout`` for a client pool purpose.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

_ENV_NAMES = (
    "CHAT_BRIDGE_TIMEOUT_START_SECONDS",
    "CHAT_BRIDGE_TIMEOUT_HTTP_SECONDS",
    "CHAT_BRIDGE_TIMEOUT_STREAM_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Connection establishment budget.
        http_timeout_seconds: Budget for one buffered request.
        stream_timeout_seconds: Idle budget while waiting for the next chunk.
    """

    start_timeout_seconds: float = 30.0
    http_timeout_seconds: float = 60.0
    stream_timeout_seconds: float = 120.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached :class:`TimeoutConfig`, refreshing on env changes."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.start_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.stream_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


def as_httpx_timeout(purpose: str) -> httpx.Timeout:
    """Return an ``httpx.Timeout`` for ``"chat"`` or ``"stream"`` pools."""
    cfg = get_timeout_config()
    read = cfg.stream_timeout_seconds if purpose == "stream" else cfg.http_timeout_seconds
    return httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.start_timeout_seconds, read=read)


__all__ = ["TimeoutConfig", "get_timeout_config", "as_httpx_timeout"]
