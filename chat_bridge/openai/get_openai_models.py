"""
OpenAI model list parsing.

``GET /v1/models`` returns every model the key can see, including embeddings,
audio and image models. Non-chat families are filtered by id prefix and the
context window is estimated per family since the endpoint does not report it.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import ModelInfo

EXCLUDED_PREFIXES = (
    "text-",
    "davinci",
    "babbage",
    "ada",
    "curie",
    "dall-e",
    "whisper",
    "omni",
    "tts",
    "gpt-4o-mini-tts",
    "computer-use",
    "codex",
    "gpt-4o-transcribe",
    "gpt-4o-mini-transcribe",
    "gpt-4o-mini-realtime",
    "gpt-4o-realtime",
    "o4-mini-deep-research",
    "o3-deep-research",
    "gpt-image",
)


def get_max_input_tokens(model_id: str) -> int:
    """Context window estimate by model family (first match wins)."""
    if model_id.startswith("gpt-4.1"):
        return 1_000_000
    if model_id.startswith("o"):
        return 200_000
    if model_id.startswith("gpt-5"):
        return 400_000
    if model_id.startswith(("gpt-4o", "gpt-4.5", "gpt-4-turbo")):
        return 128_000
    if model_id.startswith("gpt-4"):
        return 8192
    if model_id.startswith("gpt-3"):
        return 16385
    return 8000


def is_chat_model(model_id: str) -> bool:
    return not model_id.startswith(EXCLUDED_PREFIXES) and "-instruct" not in model_id


def parse_openai_models(payload: Any, provider: str = "openai") -> Dict[str, ModelInfo]:
    out: Dict[str, ModelInfo] = {}
    for item in payload["data"]:
        model_id = item["id"]
        if not is_chat_model(model_id):
            continue
        out[model_id] = ModelInfo(
            id=model_id,
            name=model_id,
            provider=provider,
            multimodal=True,
            max_input_tokens=get_max_input_tokens(model_id),
            raw=item,
        )
    return out


__all__ = ["EXCLUDED_PREFIXES", "get_max_input_tokens", "is_chat_model", "parse_openai_models"]
