"""Adapter lifecycle state machine.

States: ``unloaded -> loading -> loaded -> unloading -> unloaded``.

* ``load()`` moves through ``loading`` to ``loaded`` around the ``_do_load``
  hook. On failure the state reverts to ``unloaded``, a single reload is
  scheduled on the running loop after ``retry_delay`` seconds, and the failure
  is raised as :class:`ProviderError`. While a reload is pending, further
  failures do not schedule another one.
* ``unload()`` only acts when loaded.
* ``set_state`` rejects unknown values with :class:`InvalidStateError` and
  leaves the current state untouched.

Both provider adapters and the orchestrator use this class.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from ..config.defaults import LOAD_RETRY_SECONDS
from .errors import ErrorCode, InvalidStateError, ProviderError, classify_exception
from .logging import LogContext, get_logger, normalized_log_event


class AdapterState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    UNLOADING = "unloading"


class Lifecycle:
    """Load/unload state machine with a single delayed reload after failure."""

    def __init__(self, *, retry_delay: float = LOAD_RETRY_SECONDS) -> None:
        self._state = AdapterState.UNLOADED
        self._retry_delay = retry_delay
        self._reload_handle: Optional[asyncio.TimerHandle] = None
        self._reload_task: Optional[asyncio.Task] = None
        self._lifecycle_logger = get_logger("chat_bridge.lifecycle")

    # State ---------------------------------------------------------------
    @property
    def state(self) -> AdapterState:
        return self._state

    def set_state(self, new_state: "AdapterState | str") -> None:
        try:
            value = AdapterState(new_state)
        except ValueError:
            raise InvalidStateError(new_state) from None
        self._state = value

    @property
    def is_loaded(self) -> bool:
        return self._state is AdapterState.LOADED

    @property
    def is_loading(self) -> bool:
        return self._state is AdapterState.LOADING

    @property
    def is_unloading(self) -> bool:
        return self._state is AdapterState.UNLOADING

    @property
    def is_unloaded(self) -> bool:
        return self._state is AdapterState.UNLOADED

    @property
    def reload_pending(self) -> bool:
        return self._reload_handle is not None

    # Hooks ---------------------------------------------------------------
    async def _do_load(self) -> None:
        """Subclass hook performing the actual load work."""

    async def _do_unload(self) -> None:
        """Subclass hook releasing resources."""

    def _lifecycle_context(self) -> LogContext:
        return LogContext(provider=getattr(self, "key", None))

    # Transitions ---------------------------------------------------------
    async def load(self) -> None:
        self.set_state(AdapterState.LOADING)
        try:
            await self._do_load()
        except Exception as exc:
            self.set_state(AdapterState.UNLOADED)
            self._schedule_reload()
            code = classify_exception(exc)
            normalized_log_event(
                self._lifecycle_logger,
                "lifecycle.load_failed",
                self._lifecycle_context(),
                phase="load",
                level=logging.WARNING,
                error_code=code.value,
                error=str(exc),
                retry_in=self._retry_delay,
            )
            raise ProviderError(
                code=code if code is not ErrorCode.UNKNOWN else ErrorCode.UNAVAILABLE,
                message=f"Failed to load model: {exc}",
                provider=getattr(self, "key", "unknown"),
                retryable=True,
                raw=exc,
            ) from exc
        self.set_state(AdapterState.LOADED)

    async def unload(self) -> None:
        if not self.is_loaded:
            return
        self.set_state(AdapterState.UNLOADING)
        try:
            await self._do_unload()
        finally:
            self.set_state(AdapterState.UNLOADED)

    # Reload scheduling ---------------------------------------------------
    def _schedule_reload(self) -> None:
        if self._reload_handle is not None:
            return
        loop = asyncio.get_running_loop()
        self._reload_handle = loop.call_later(self._retry_delay, self._fire_reload)

    def _fire_reload(self) -> None:
        self._reload_handle = None
        self._reload_task = asyncio.ensure_future(self._reload())

    async def _reload(self) -> None:
        try:
            await self.load()
        except ProviderError:
            # already logged by load(); the next attempt is scheduled there
            return
        normalized_log_event(
            self._lifecycle_logger,
            "lifecycle.reloaded",
            self._lifecycle_context(),
            phase="load",
        )

    def cancel_reload(self) -> None:
        """Cancel a pending reload (no-op when none is scheduled)."""
        if self._reload_handle is not None:
            self._reload_handle.cancel()
            self._reload_handle = None


__all__ = ["AdapterState", "Lifecycle"]
