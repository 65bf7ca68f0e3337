"""ChatOrchestrator: adapter resolution, settings push-down and callbacks."""
from __future__ import annotations

import json

import pytest

from chat_bridge import ADAPTERS, ChatOrchestrator, UnknownProviderError, create_adapter
from chat_bridge.base.errors import ErrorCode, ProviderError
from chat_bridge.base.lifecycle import AdapterState
from chat_bridge.base.models import ModelOption
from chat_bridge.config import AdapterSettings, ChatSettings

from .helpers import FakeResponse, FakeStreamSource, sse

CHAT_URL = "https://api.openai.com/v1/chat/completions"
HELLO = {"messages": [{"role": "user", "content": "hello"}]}


@pytest.fixture()
def make_orchestrator(transport, catalog, registry):
    def factory(settings=None, **kwargs):
        kwargs.setdefault("transport", transport)
        kwargs.setdefault("catalog", catalog)
        kwargs.setdefault("registry", registry)
        return ChatOrchestrator(settings, **kwargs)

    return factory


def _settings(**kwargs):
    kwargs.setdefault("adapter", "openai")
    kwargs.setdefault("adapters", {"openai": AdapterSettings(api_key="sk-1")})
    return ChatSettings(**kwargs)


def _reply(content):
    return FakeResponse(
        {
            "id": "chatcmpl-9",
            "model": "gpt-5-nano",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
        }
    )


@pytest.mark.asyncio
async def test_hello_end_to_end(make_orchestrator, transport):
    transport.add(CHAT_URL, _reply("Hi there"))
    orch = make_orchestrator(_settings(model_key="gpt-4o"))
    res = await orch.complete(HELLO)
    assert res.content == "Hi there" and res.usage.total_tokens == 2  # nosec B101
    sent = transport.requests[-1]
    assert sent.headers["Authorization"] == "Bearer sk-1"  # nosec B101
    assert json.loads(sent.body)["model"] == "gpt-4o"  # nosec B101


@pytest.mark.asyncio
async def test_complete_raises_normalized_provider_error(make_orchestrator, transport):
    transport.add(CHAT_URL, FakeResponse({"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}}, status=401))
    orch = make_orchestrator(_settings())
    with pytest.raises(ProviderError) as info:
        await orch.complete(HELLO)
    err = info.value
    assert err.code is ErrorCode.AUTH and err.http_status == 401  # nosec B101
    assert err.message == "Incorrect API key provided" and err.provider == "openai"  # nosec B101


@pytest.mark.asyncio
async def test_invalid_request_is_a_validation_error_before_any_io(make_orchestrator, transport):
    orch = make_orchestrator(_settings())
    for call in (orch.complete, orch.stream, orch.adapter.complete):
        with pytest.raises(ProviderError) as info:
            await call({"messages": []})
        assert info.value.code is ErrorCode.VALIDATION and info.value.provider == "openai"  # nosec B101
    assert transport.requests == [] and transport.stream_requests == []  # nosec B101


def test_unknown_adapter_falls_back_with_one_warning(make_orchestrator, log_capture):
    orch = make_orchestrator(_settings(adapter="does-not-exist"))
    assert orch.adapter_name == "openai" and orch.key == "openai"  # nosec B101
    assert orch.adapter.key == "openai"  # nosec B101
    warnings = log_capture.events("adapter.fallback")
    assert len(warnings) == 1 and warnings[0]["configured"] == "does-not-exist"  # nosec B101


def test_model_key_precedence(make_orchestrator):
    settings = _settings()
    orch = make_orchestrator(settings)
    assert orch.model_key == "gpt-5-nano"  # nosec B101
    settings.model_key = "global-model"
    assert orch.model_key == "global-model"  # nosec B101
    settings.adapters["openai"].model_key = "adapter-model"
    assert orch.model_key == "adapter-model"  # nosec B101
    explicit = make_orchestrator(settings, model_key="explicit-model")
    assert explicit.model_key == "explicit-model"  # nosec B101
    assert explicit.adapter.model == "explicit-model"  # nosec B101


def test_api_key_falls_back_to_global(make_orchestrator):
    settings = _settings(adapters={}, api_key="sk-global")
    orch = make_orchestrator(settings)
    assert orch.api_key == "sk-global"  # nosec B101
    settings.adapters["openai"].api_key = "sk-adapter"
    assert orch.adapter.api_key == "sk-adapter"  # nosec B101


@pytest.mark.asyncio
async def test_base_url_is_pushed_to_adapter(make_orchestrator, transport):
    transport.add(
        "http://gpu:11434/api/chat",
        FakeResponse({"model": "llama3.2", "created_at": "t", "message": {"role": "assistant", "content": "local"}, "done_reason": "stop"}),
    )
    settings = ChatSettings(adapter="ollama", adapters={"ollama": AdapterSettings(base_url="http://gpu:11434")})
    res = await make_orchestrator(settings).complete(HELLO)
    assert res.content == "local"  # nosec B101


@pytest.mark.asyncio
async def test_stream_and_stop_delegate(make_orchestrator, transport):
    transport.add_stream(FakeStreamSource([sse({"id": "s", "choices": [{"index": 0, "delta": {"content": "yo"}}]}), "data: [DONE]"]))
    orch = make_orchestrator(_settings())
    assert orch.can_stream  # nosec B101
    done = []
    res = await orch.stream(HELLO, {"done": done.append})
    assert res.content == "yo" and done == [res]  # nosec B101
    orch.stop_stream()


def test_platform_options_follow_registration_order(make_orchestrator):
    options = make_orchestrator(_settings()).get_platforms_as_options()
    assert [o.value for o in options] == list(ADAPTERS)  # nosec B101
    assert options[0] == ModelOption("openai", "OpenAI")  # nosec B101


def test_missing_callbacks_are_logged(make_orchestrator, log_capture):
    make_orchestrator(_settings()).adapter_changed()
    missing = [e["callback"] for e in log_capture.events("settings.callback_missing")]
    assert missing == ["reload_model", "re_render_settings"]  # nosec B101


def test_model_change_runs_callbacks_in_order(make_orchestrator):
    calls = []
    orch = make_orchestrator(
        _settings(),
        reload_model=lambda: calls.append("reload"),
        re_render_settings=lambda: calls.append("render"),
    )
    orch.model_changed()
    assert calls == ["reload", "render"]  # nosec B101


@pytest.mark.asyncio
async def test_credentials_check_re_renders(make_orchestrator, transport):
    transport.add("https://api.openai.com/v1/models", FakeResponse({"data": [{"id": "gpt-4o"}]}))
    calls = []
    orch = make_orchestrator(_settings(), re_render_settings=lambda: calls.append(1))
    assert await orch.test_credentials() is True  # nosec B101
    assert calls == [1]  # nosec B101


@pytest.mark.asyncio
async def test_models_and_token_count(make_orchestrator, transport):
    transport.add("https://api.openai.com/v1/models", FakeResponse({"data": [{"id": "gpt-4o"}]}))
    orch = make_orchestrator(_settings())
    assert list(await orch.get_models()) == ["gpt-4o"]  # nosec B101
    assert orch.get_models_as_options() == [ModelOption("gpt-4o", "gpt-4o")]  # nosec B101
    assert await orch.count_tokens("hello world") > 0  # nosec B101


@pytest.mark.asyncio
async def test_load_and_unload_follow_adapter(make_orchestrator):
    orch = make_orchestrator(_settings())
    await orch.load()
    assert orch.state is AdapterState.LOADED and orch.adapter.state is AdapterState.LOADED  # nosec B101
    await orch.unload()
    assert orch.adapter.state is AdapterState.UNLOADED  # nosec B101


def test_gemini_alias_resolves_to_google_definition(make_orchestrator):
    orch = make_orchestrator(ChatSettings(adapter="gemini"))
    assert orch.adapter.key == "gemini"  # nosec B101
    assert orch.adapter.config.registry_id == "google"  # nosec B101


def test_empty_registry_is_rejected():
    with pytest.raises(ValueError):
        ChatOrchestrator(ChatSettings(), adapters={})


def test_create_adapter_rejects_unknown_keys(transport, catalog, registry):
    with pytest.raises(UnknownProviderError) as info:
        create_adapter("nope", transport=transport)
    assert info.value.code is ErrorCode.NOT_FOUND  # nosec B101
    assert create_adapter("groq", transport=transport, catalog=catalog, registry=registry).key == "groq"  # nosec B101
