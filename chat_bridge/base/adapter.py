"""Chat adapter: one provider definition bound to credentials and collaborators.

Purpose
-------
Runs the provider-agnostic flows (buffered completion, streaming, model
catalog, token counting, key testing) and delegates every wire detail to the
:class:`ProviderDefinition` hooks and translators.

Collaborators are injected: the transport (``HttpxTransport`` by default), the
model catalog cache and the registry index (process-wide defaults). Tests pass
fakes for all three.

Failure semantics
-----------------
- ``complete`` never raises for provider or transport failures; the returned
  response carries ``error``. Translators may raise :class:`CapabilityError`
  before any network call.
- ``stream`` raises :class:`StreamBusyError` when a stream is already open and
  the normalized :class:`ProviderError` when the stream fails. A stopped
  stream resolves to its partial response.
- Catalog refreshes are best effort: fetch failures are logged and the flow
  continues with whatever is known.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from ..config.defaults import LOAD_RETRY_SECONDS, RE_RENDER_DELAY_SECONDS
from .auth import build_auth_headers
from .catalog import (
    ModelCatalogCache,
    ModelRegistryIndex,
    NO_MODELS_OPTION,
    enrich_models,
    get_default_catalog_cache,
    get_default_registry,
    models_as_options,
)
from .dto import parse_chat_request
from .errors import ErrorCode, ProviderError, classify_exception, classify_status, normalize_error
from .http import HttpxTransport
from .interfaces import Transport
from .lifecycle import Lifecycle
from .logging import LogContext, get_logger, log_event, normalized_log_event
from .models import ChatCompletionResponse, ChatRequest, ModelInfo, ModelOption, ProviderConfig, TransportRequest
from .provider_definition import ProviderDefinition
from .streaming import StreamController, StreamHandlers
from .streaming.stream_handlers import invoke
from .tokens import count_tokens as local_count_tokens
from .translation import TranslationContext

RequestInput = Union[ChatRequest, Mapping[str, Any]]

_logger = get_logger("chat_bridge.adapter")
_catalog_logger = get_logger("chat_bridge.catalog")


class ChatAdapter(Lifecycle):
    """Provider adapter driven by a :class:`ProviderDefinition`.

    Parameters:
        definition: The provider record.
        api_key / model_key / base_url: Resolved settings; the orchestrator
            keeps them current.
        transport: Transport collaborator.
        catalog / registry: Model catalog cache and registry index.
        re_render_settings: Called (after a short delay) when a refreshed
            catalog is valid.
    """

    def __init__(
        self,
        definition: ProviderDefinition,
        *,
        api_key: Optional[str] = None,
        model_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[Transport] = None,
        catalog: Optional[ModelCatalogCache] = None,
        registry: Optional[ModelRegistryIndex] = None,
        re_render_settings: Optional[Callable[[], Any]] = None,
        retry_delay: float = LOAD_RETRY_SECONDS,
        re_render_delay: float = RE_RENDER_DELAY_SECONDS,
    ) -> None:
        super().__init__(retry_delay=retry_delay)
        self.definition = definition
        self.api_key = api_key
        self.model_key = model_key
        self.base_url = base_url
        self.transport: Transport = transport or HttpxTransport()
        self.catalog = catalog or get_default_catalog_cache()
        self.registry = registry or get_default_registry(self.transport)
        self.re_render_settings = re_render_settings
        self.re_render_delay = re_render_delay
        self._refresh_task: Optional[asyncio.Task] = None
        self.controller = StreamController(
            self.transport,
            provider=self.key,
            splitting_regex=definition.config.chunk_splitting_regex,
        )

    # Configuration -------------------------------------------------------
    @property
    def key(self) -> str:
        return self.definition.key

    @property
    def config(self) -> ProviderConfig:
        cfg = self.definition.config
        if self.base_url and self.definition.apply_base_url is not None:
            cfg = self.definition.apply_base_url(cfg, self.base_url)
        return cfg

    @property
    def model(self) -> str:
        return self.model_key or self.definition.config.default_model

    @property
    def can_stream(self) -> bool:
        return self.definition.config.streaming

    def context(self) -> TranslationContext:
        return TranslationContext(
            config=self.config,
            api_key=self.api_key,
            model_key=self.model,
            base_url=self.base_url,
        )

    def auth_headers(self, headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        cfg = self.config
        return build_auth_headers(
            self.api_key,
            cfg.api_key_header,
            {**cfg.extra_headers, **(headers or {})},
            warn_missing=cfg.api_key_required,
            provider=self.key,
        )

    def _log_context(self, model: Optional[str] = None) -> LogContext:
        return LogContext(provider=self.key, model=model or self.model)

    def _lifecycle_context(self) -> LogContext:
        return self._log_context()

    async def _do_unload(self) -> None:
        self.stop_stream()

    # HTTP helpers --------------------------------------------------------
    async def fetch_json(self, request: TransportRequest) -> Any:
        """Perform ``request`` and return its JSON body.

        Raises:
            ProviderError: transport failures, error statuses (with the
                normalized body) and undecodable bodies.
        """
        response = await self.transport.request(request)
        status = response.status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError(
                code=classify_status(status) or ErrorCode.PARSE,
                message=f"Invalid JSON from {request.url}",
                provider=self.key,
                http_status=status,
                raw=response.text(),
            ) from exc
        if status >= 400:
            err = normalize_error(payload, status)
            raise ProviderError(
                code=classify_status(status) or ErrorCode.UNKNOWN,
                message=err.message,
                provider=self.key,
                details=err.details,
                http_status=status,
                raw=payload,
            )
        return payload

    # Completion ----------------------------------------------------------
    async def complete(self, request: RequestInput) -> ChatCompletionResponse:
        """Send a buffered completion and return the canonical response."""
        req = parse_chat_request(request, provider=self.key)
        ctx = self.context()
        wire = self.definition.request_translator(ctx).to_platform(req, stream=False)
        translator = self.definition.response_translator(ctx)
        log_ctx = self._log_context(req.model)
        try:
            response = await self.transport.request(wire)
        except ProviderError as exc:
            normalized_log_event(
                _logger,
                "adapter.complete",
                log_ctx,
                phase="finalize",
                level=logging.WARNING,
                error_code=exc.code.value,
                error=exc.message,
            )
            return ChatCompletionResponse.from_error(exc.to_normalized(), raw=exc.raw)
        status = response.status()
        try:
            payload: Any = response.json()
        except ValueError:
            payload = {"error": response.text() or f"HTTP {status}"}
        if status >= 400 and not (isinstance(payload, Mapping) and payload.get("error")):
            payload = {"error": payload}
        result = translator.to_openai(payload, status)
        normalized_log_event(
            _logger,
            "adapter.complete",
            log_ctx,
            phase="finalize",
            level=logging.WARNING if result.error else logging.INFO,
            error_code=(classify_status(status) or ErrorCode.UNKNOWN).value if result.error else None,
            tokens=result.usage,
            http_status=status,
        )
        return result

    # Streaming -----------------------------------------------------------
    async def stream(self, request: RequestInput, handlers: Any = None) -> ChatCompletionResponse:
        """Stream a completion, invoking ``handlers`` as chunks arrive.

        Non-streaming providers fall back to :meth:`complete` and deliver the
        result through ``done`` (or ``error``) exactly once.
        """
        req = parse_chat_request(request, provider=self.key)
        handlers = StreamHandlers.coerce(handlers)
        if not self.can_stream:
            return await self._complete_as_stream(req, handlers)
        ctx = self.context()
        wire = self.definition.request_translator(ctx).to_platform(req, stream=True)
        translator = self.definition.response_translator(ctx)
        run = self.controller.start(wire, translator, handlers, model=req.model or self.model)
        return await self.controller.wait(run)

    async def _complete_as_stream(self, req: ChatRequest, handlers: StreamHandlers) -> ChatCompletionResponse:
        result = await self.complete(req)
        if result.error is not None:
            await invoke(handlers.error, result.error)
            raise ProviderError.from_normalized(result.error, provider=self.key, model=req.model or self.model)
        await invoke(handlers.done, result)
        return result

    def stop_stream(self) -> None:
        self.controller.stop()

    # Tokens / credentials --------------------------------------------------
    async def count_tokens(self, value: Any) -> int:
        if self.definition.count_tokens is not None:
            return await self.definition.count_tokens(self, value)
        return local_count_tokens(value)

    async def test_api_key(self) -> bool:
        """Return whether the configured credentials are accepted."""
        if self.definition.test_api_key is not None:
            return await self.definition.test_api_key(self)
        if self.definition.parse_models is None:
            return bool(await self.get_models(refresh=True))
        try:
            models = self.definition.parse_models(await self._fetch_model_payload(), self.key)
        except ProviderError as exc:
            log_event(
                _logger,
                "adapter.key_rejected",
                self._log_context(),
                level=logging.WARNING,
                error_code=exc.code.value,
                http_status=exc.http_status,
            )
            return False
        return bool(models) and "_" not in models

    # Model catalog ----------------------------------------------------------
    def models_request(self) -> TransportRequest:
        if self.definition.models_request is not None:
            return self.definition.models_request(self)
        cfg = self.config
        return TransportRequest(
            url=cfg.models_endpoint or "",
            method=cfg.models_endpoint_method,
            headers=self.auth_headers(),
        )

    async def _fetch_model_payload(self) -> Any:
        if self.definition.fetch_models is not None:
            return await self.definition.fetch_models(self)
        return await self.fetch_json(self.models_request())

    def _can_fetch_models(self) -> bool:
        if self.definition.parse_models is None:
            return False
        return bool(self.api_key) or not self.config.api_key_required

    async def get_models(self, refresh: bool = False) -> Dict[str, ModelInfo]:
        """Return the provider's model catalog, refreshing it when stale."""
        if not refresh and self.catalog.is_valid(self.key):
            return self.catalog.get(self.key)
        known: Dict[str, ModelInfo] = dict(self.catalog.get(self.key))
        if self._can_fetch_models():
            try:
                known = self.definition.parse_models(await self._fetch_model_payload(), self.key)
            except Exception as exc:  # best effort: parsers see arbitrary payloads
                log_event(
                    _catalog_logger,
                    "catalog.fetch_failed",
                    self._log_context(),
                    level=logging.WARNING,
                    error=str(exc),
                    error_code=classify_exception(exc).value,
                )
        registry_models = await self.registry.models_for(self.config.registry_id)
        models = enrich_models(known, registry_models, self.key)
        self.catalog.set(self.key, models)
        if self.catalog.is_valid(self.key):
            self._schedule_re_render()
        else:
            log_event(_catalog_logger, "catalog.invalid", self._log_context(), level=logging.WARNING)
        return models

    def _schedule_re_render(self) -> None:
        if self.re_render_settings is None:
            return
        asyncio.get_running_loop().call_later(self.re_render_delay, self.re_render_settings)

    def get_models_as_options(self) -> List[ModelOption]:
        """Return picker options; an empty catalog triggers a background refresh."""
        models = self.catalog.get(self.key)
        if models:
            return models_as_options(models)
        self.refresh_models()
        return [NO_MODELS_OPTION]

    def refresh_models(self) -> Optional[Awaitable[Dict[str, ModelInfo]]]:
        """Schedule a catalog refresh on the running loop (no-op without one)."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None
        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = loop.create_task(self.get_models(refresh=True))
        return self._refresh_task


__all__ = ["ChatAdapter"]
