"""Model catalog cache, registry index and adapter catalog flow."""
from __future__ import annotations

import asyncio

import pytest

from chat_bridge.base.catalog import (
    NO_MODELS_OPTION,
    ModelRegistryIndex,
    enrich_models,
    models_as_options,
    placeholder_catalog,
)
from chat_bridge.base.errors import ErrorCode, ProviderError
from chat_bridge.base.models import ModelInfo, ModelOption
from chat_bridge.openai import OPENAI

from .helpers import FakeClock, FakeRegistry, FakeResponse, FakeTransport

MODELS_URL = "https://api.openai.com/v1/models"
LISTING = {"data": [{"id": "gpt-4o"}, {"id": "whisper-1"}, {"id": "gpt-3.5-turbo-instruct"}, {"id": "o3-mini"}]}


def _info(model_id, name=None):
    return ModelInfo(id=model_id, name=name or model_id, provider="openai")


def test_catalog_validity_window(catalog, fake_clock):
    assert not catalog.is_valid("openai")  # nosec B101
    catalog.set("openai", {"a": _info("a")})
    fake_clock.advance(59 * 60)
    assert catalog.is_valid("openai")  # nosec B101
    fake_clock.advance(2 * 60)
    assert not catalog.is_valid("openai")  # nosec B101
    # stale entries stay readable
    assert catalog.get("openai")  # nosec B101


def test_empty_catalog_is_never_valid(catalog):
    catalog.set("openai", {})
    assert not catalog.is_valid("openai")  # nosec B101


def test_catalog_is_shared_per_provider(catalog):
    catalog.set("openai", {"a": _info("a")})
    catalog.clear("anthropic")
    assert "a" in catalog.get("openai") and catalog.get("anthropic") == {}  # nosec B101
    catalog.clear()
    assert catalog.get("openai") == {}  # nosec B101


def test_options_sorted_by_name_and_placeholder():
    models = {"b": _info("b", "Zeta"), "a": _info("a", "Alpha")}
    assert models_as_options(models) == [ModelOption("a", "Alpha"), ModelOption("b", "Zeta")]  # nosec B101
    assert models_as_options({}) == [NO_MODELS_OPTION]  # nosec B101
    assert NO_MODELS_OPTION.name == "No models currently available"  # nosec B101


def test_enrichment_keeps_identity():
    known = {"gpt-4o": _info("gpt-4o")}
    registry = {
        "gpt-4o": {
            "id": "something-else",
            "name": "GPT-4o",
            "limit": {"context": 128000},
            "modalities": {"input": ["text", "image"]},
            "cost": {"input": 2.5},
        }
    }
    enriched = enrich_models(known, registry, "openai")["gpt-4o"]
    assert enriched.id == "gpt-4o" and enriched.provider == "openai"  # nosec B101
    assert enriched.name == "GPT-4o" and enriched.multimodal  # nosec B101
    assert enriched.max_input_tokens == 128000 and enriched.max_output_tokens == 10000  # nosec B101
    assert enriched.cost == {"input": 2.5} and enriched.models_dev["id"] == "something-else"  # nosec B101


def test_enrichment_seeds_empty_catalog():
    seeded = enrich_models({}, {"m1": {"name": "Model One"}}, "xai")
    assert seeded["m1"].provider == "xai" and seeded["m1"].name == "Model One"  # nosec B101


@pytest.mark.asyncio
async def test_get_models_caches_and_refreshes(make_adapter, transport, fake_clock):
    transport.add(MODELS_URL, FakeResponse(LISTING))
    adapter = make_adapter(OPENAI)
    models = await adapter.get_models()
    assert sorted(models) == ["gpt-4o", "o3-mini"]  # nosec B101
    await adapter.get_models()
    assert len(transport.requests) == 1  # nosec B101
    await adapter.get_models(refresh=True)
    assert len(transport.requests) == 2  # nosec B101
    fake_clock.advance(61 * 60)
    await adapter.get_models()
    assert len(transport.requests) == 3  # nosec B101


@pytest.mark.asyncio
async def test_fetch_failure_keeps_previous_catalog(make_adapter, transport, catalog, fake_clock, log_capture):
    catalog.set("openai", {"gpt-4o": _info("gpt-4o")})
    fake_clock.advance(2 * 3600)
    transport.add(MODELS_URL, FakeResponse({"error": {"message": "boom"}}, status=500))
    models = await make_adapter(OPENAI).get_models()
    assert list(models) == ["gpt-4o"]  # nosec B101
    failed = log_capture.events("catalog.fetch_failed")
    assert failed and failed[0]["error_code"] == ErrorCode.SERVER_ERROR.value  # nosec B101


@pytest.mark.asyncio
async def test_missing_key_skips_fetch_and_logs_invalid(make_adapter, transport, log_capture):
    models = await make_adapter(OPENAI, api_key=None).get_models()
    assert models == {} and transport.requests == []  # nosec B101
    assert log_capture.events("catalog.invalid")  # nosec B101


@pytest.mark.asyncio
async def test_registry_only_catalog(make_adapter, transport):
    registry = FakeRegistry({"openai": {"gpt-5": {"name": "GPT-5"}}})
    models = await make_adapter(OPENAI, api_key=None, registry=registry).get_models()
    assert models["gpt-5"].name == "GPT-5"  # nosec B101
    assert registry.calls == ["openai"]  # nosec B101


@pytest.mark.asyncio
async def test_valid_refresh_schedules_re_render(make_adapter, transport):
    transport.add(MODELS_URL, FakeResponse(LISTING))
    calls = []
    adapter = make_adapter(OPENAI, re_render_settings=lambda: calls.append(1), re_render_delay=0)
    await adapter.get_models(refresh=True)
    await asyncio.sleep(0.01)
    assert calls == [1]  # nosec B101


@pytest.mark.asyncio
async def test_options_trigger_background_refresh(make_adapter, transport):
    transport.add(MODELS_URL, FakeResponse(LISTING))
    adapter = make_adapter(OPENAI)
    assert adapter.get_models_as_options() == [NO_MODELS_OPTION]  # nosec B101
    await adapter.refresh_models()
    assert [o.value for o in adapter.get_models_as_options()] == ["gpt-4o", "o3-mini"]  # nosec B101


def test_refresh_without_loop_is_noop(make_adapter):
    assert make_adapter(OPENAI).refresh_models() is None  # nosec B101


@pytest.mark.asyncio
async def test_key_test_uses_model_listing(make_adapter, transport):
    transport.add(MODELS_URL, FakeResponse(LISTING))
    assert await make_adapter(OPENAI).test_api_key() is True  # nosec B101
    transport.replies.clear()
    transport.add(MODELS_URL, FakeResponse({"error": {"message": "Incorrect API key"}}, status=401))
    assert await make_adapter(OPENAI).test_api_key() is False  # nosec B101


def test_placeholder_catalog_shape():
    entry = placeholder_catalog("No models found.", "groq")["_"]
    assert entry.name == "No models found." and entry.provider == "groq"  # nosec B101


# Registry index --------------------------------------------------------------

REGISTRY_URL = "https://registry.test/api.json"


def _registry(transport, clock):
    return ModelRegistryIndex(transport, clock=clock, ttl_seconds=3600, url=REGISTRY_URL)


@pytest.mark.asyncio
async def test_registry_fetches_once_per_ttl():
    transport = FakeTransport().add(REGISTRY_URL, FakeResponse({"openai": {"models": {"gpt-4o": {"name": "GPT-4o"}}}}))
    clock = FakeClock()
    index = _registry(transport, clock)
    assert await index.models_for("openai") == {"gpt-4o": {"name": "GPT-4o"}}  # nosec B101
    assert await index.models_for("anthropic") == {}  # nosec B101
    assert len(transport.requests) == 1 and index.fresh  # nosec B101
    clock.advance(3601)
    await index.models_for("openai")
    assert len(transport.requests) == 2  # nosec B101


@pytest.mark.asyncio
async def test_registry_keeps_stale_copy_on_failure(log_capture):
    transport = FakeTransport()
    transport.add(REGISTRY_URL, FakeResponse({"openai": {"models": {"a": {}}}}))
    transport.add(REGISTRY_URL, FakeResponse("oops", status=503))
    transport.add(REGISTRY_URL, ProviderError(code=ErrorCode.TRANSIENT, message="reset", provider="transport"))
    clock = FakeClock()
    index = _registry(transport, clock)
    await index.fetch()
    for _ in range(2):
        clock.advance(3601)
        assert await index.models_for("openai") == {"a": {}}  # nosec B101
    codes = [e["error_code"] for e in log_capture.events("registry.fetch_failed")]
    assert codes == [ErrorCode.UNAVAILABLE.value, ErrorCode.TRANSIENT.value]  # nosec B101


@pytest.mark.asyncio
async def test_registry_failure_before_first_fetch_is_empty():
    transport = FakeTransport().add(REGISTRY_URL, FakeResponse(["not", "an", "object"]))
    assert await _registry(transport, FakeClock()).models_for("openai") == {}  # nosec B101
