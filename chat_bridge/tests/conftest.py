"""Fixtures for the chat_bridge test suite.

Every adapter built here is wired to in-memory collaborators (see
``helpers.py``); no test touches the network.
"""
from __future__ import annotations

import logging
from typing import Any

import pytest

from chat_bridge.base.adapter import ChatAdapter
from chat_bridge.base.catalog import ModelCatalogCache
from chat_bridge.base.provider_definition import ProviderDefinition

from .helpers import FakeClock, FakeRegistry, FakeTransport, LogCapture


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture()
def catalog(fake_clock: FakeClock) -> ModelCatalogCache:
    return ModelCatalogCache(clock=fake_clock)


@pytest.fixture()
def make_adapter(transport: FakeTransport, catalog: ModelCatalogCache, registry: FakeRegistry):
    """Build a :class:`ChatAdapter` wired to the in-memory collaborators."""

    def factory(definition: ProviderDefinition, **kwargs: Any) -> ChatAdapter:
        kwargs.setdefault("api_key", "sk-live")
        kwargs.setdefault("transport", transport)
        kwargs.setdefault("catalog", catalog)
        kwargs.setdefault("registry", registry)
        return ChatAdapter(definition, **kwargs)

    return factory


@pytest.fixture()
def log_capture():
    """Collect records emitted under the ``chat_bridge`` logger."""
    capture = LogCapture()
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = capture.records.append  # type: ignore[assignment]
    logger = logging.getLogger("chat_bridge")
    logger.addHandler(handler)
    try:
        yield capture
    finally:
        logger.removeHandler(handler)
