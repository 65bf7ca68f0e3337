"""Chat orchestrator.

Purpose
-------
The single entry point callers use: it resolves the configured adapter key,
api key and model from :class:`ChatSettings`, keeps one :class:`ChatAdapter`
per key, pushes the current settings into it before every operation, and
exposes the provider-agnostic operations (complete, stream, count tokens,
test credentials, model catalog).

Adapter selection
-----------------
An unknown ``settings.adapter`` never raises: the first registered adapter is
used instead and an ``adapter.fallback`` warning is logged.

Callbacks
---------
``reload_model`` and ``re_render_settings`` are injected by the host. Missing
callbacks are tolerated with a ``settings.callback_missing`` warning.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .base.adapter import ChatAdapter, RequestInput
from .base.catalog import ModelCatalogCache, ModelRegistryIndex, get_default_catalog_cache
from .base.errors import ProviderError
from .base.interfaces import Transport
from .base.lifecycle import Lifecycle
from .base.logging import LogContext, get_logger, log_event
from .base.models import ChatCompletionResponse, ModelInfo, ModelOption
from .base.dto import parse_chat_request
from .base.streaming import StreamHandlers
from .config.defaults import CATALOG_TTL_SECONDS
from .config.settings import ChatSettings
from .providers import ADAPTERS

AdapterFactory = Callable[..., ChatAdapter]

_logger = get_logger("chat_bridge.orchestrator")
_UNSET = object()


class ChatOrchestrator(Lifecycle):
    """Facade over the registered chat adapters.

    Parameters:
        settings: Chat settings; defaults to an empty :class:`ChatSettings`.
        adapters: Key -> factory mapping (defaults to :data:`ADAPTERS`).
        transport / catalog / registry: Collaborators shared by every adapter.
        re_render_settings / reload_model: Host callbacks.
        model_key: Explicit model selection that wins over settings.
    """

    def __init__(
        self,
        settings: Optional[ChatSettings] = None,
        adapters: Optional[Mapping[str, AdapterFactory]] = None,
        *,
        transport: Optional[Transport] = None,
        catalog: Optional[ModelCatalogCache] = None,
        registry: Optional[ModelRegistryIndex] = None,
        re_render_settings: Optional[Callable[[], Any]] = None,
        reload_model: Optional[Callable[[], Any]] = None,
        model_key: Optional[str] = None,
    ) -> None:
        self.settings = settings or ChatSettings()
        super().__init__(retry_delay=self.settings.load_retry_seconds)
        self.adapters: Dict[str, AdapterFactory] = dict(adapters if adapters is not None else ADAPTERS)
        if not self.adapters:
            raise ValueError("at least one adapter must be registered")
        self.transport = transport
        self.catalog = catalog or self._default_catalog()
        self.registry = registry or ModelRegistryIndex(
            transport,
            ttl_seconds=self.settings.registry_ttl_seconds,
            url=self.settings.registry_url,
        )
        self.re_render_settings = re_render_settings
        self.reload_model = reload_model
        self.opts_model_key = model_key
        self._instances: Dict[str, ChatAdapter] = {}
        # warn once per unknown configured key
        self._fallback_warned: Any = _UNSET

    def _default_catalog(self) -> ModelCatalogCache:
        if self.settings.catalog_ttl_seconds == CATALOG_TTL_SECONDS:
            return get_default_catalog_cache()
        return ModelCatalogCache(ttl_seconds=self.settings.catalog_ttl_seconds)

    # Resolution ----------------------------------------------------------
    @property
    def adapter_name(self) -> str:
        """Configured adapter key, or the first registered key when unknown."""
        configured = self.settings.adapter
        if configured in self.adapters:
            return configured
        fallback = next(iter(self.adapters))
        if self._fallback_warned == configured:
            return fallback
        self._fallback_warned = configured
        log_event(
            _logger,
            "adapter.fallback",
            LogContext(provider=fallback),
            level=logging.WARNING,
            configured=configured,
        )
        return fallback

    @property
    def key(self) -> str:
        return self.adapter_name

    def _instance(self, name: str) -> ChatAdapter:
        adapter = self._instances.get(name)
        if adapter is None:
            adapter = self.adapters[name](
                transport=self.transport,
                catalog=self.catalog,
                registry=self.registry,
                re_render_settings=self.re_render_settings,
                retry_delay=self.settings.load_retry_seconds,
                re_render_delay=self.settings.re_render_delay_seconds,
            )
            self._instances[name] = adapter
        return adapter

    @property
    def adapter(self) -> ChatAdapter:
        """The active adapter, with the current settings pushed into it."""
        name = self.adapter_name
        adapter = self._instance(name)
        block = self.settings.for_adapter(name)
        adapter.api_key = self.api_key
        adapter.model_key = self.model_key
        adapter.base_url = block.base_url
        return adapter

    @property
    def model_key(self) -> str:
        """Explicit selection, then adapter settings, then global settings, then the provider default."""
        name = self.adapter_name
        block = self.settings.for_adapter(name)
        chosen = self.opts_model_key or block.model_key or self.settings.model_key
        return chosen or self._instance(name).definition.config.default_model

    @property
    def api_key(self) -> Optional[str]:
        return self.settings.for_adapter(self.adapter_name).api_key or self.settings.api_key

    @property
    def can_stream(self) -> bool:
        return self.adapter.can_stream

    def _lifecycle_context(self) -> LogContext:
        return LogContext(provider=self.adapter_name)

    # Lifecycle -------------------------------------------------------------
    async def _do_load(self) -> None:
        await self.adapter.load()

    async def _do_unload(self) -> None:
        await self.adapter.unload()

    # Operations ------------------------------------------------------------
    async def complete(self, request: RequestInput) -> ChatCompletionResponse:
        """Buffered completion.

        Raises:
            ProviderError: the provider reported an error.
            CapabilityError: the request uses something the provider lacks.
        """
        adapter = self.adapter
        req = parse_chat_request(request, provider=adapter.key)
        response = await adapter.complete(req)
        if response.error is not None:
            raise ProviderError.from_normalized(response.error, provider=adapter.key, model=req.model or adapter.model)
        return response

    async def stream(self, request: RequestInput, handlers: Any = None) -> ChatCompletionResponse:
        return await self.adapter.stream(request, StreamHandlers.coerce(handlers))

    def stop_stream(self) -> None:
        instance = self._instances.get(self.adapter_name)
        if instance is not None:
            instance.stop_stream()

    async def count_tokens(self, value: Any) -> int:
        return await self.adapter.count_tokens(value)

    async def test_credentials(self) -> bool:
        """Probe the active adapter's credentials, then re-render settings."""
        ok = await self.adapter.test_api_key()
        self._call("re_render_settings")
        return ok

    async def get_models(self, refresh: bool = False) -> Dict[str, ModelInfo]:
        return await self.adapter.get_models(refresh=refresh)

    def get_models_as_options(self) -> List[ModelOption]:
        return self.adapter.get_models_as_options()

    def get_platforms_as_options(self) -> List[ModelOption]:
        return [
            ModelOption(value=key, name=getattr(factory, "description", key))
            for key, factory in self.adapters.items()
        ]

    # Settings callbacks ----------------------------------------------------
    def adapter_changed(self) -> None:
        self._call("reload_model")
        self._call("re_render_settings")

    def model_changed(self) -> None:
        self._call("reload_model")
        self._call("re_render_settings")

    def _call(self, name: str) -> None:
        callback = getattr(self, name)
        if callback is None:
            log_event(
                _logger,
                "settings.callback_missing",
                LogContext(provider=self.adapter_name),
                level=logging.WARNING,
                callback=name,
            )
            return
        callback()


__all__ = ["ChatOrchestrator", "AdapterFactory"]
