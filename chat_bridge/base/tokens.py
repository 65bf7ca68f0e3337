"""Token counting.

Counts with the tiktoken ``cl100k_base`` encoding. When the encoding cannot be
loaded (offline, first use without the BPE file cached) the count falls back
to ``ceil(len(text) / 4)``, the same heuristic providers without a counting
endpoint use.
"""
from __future__ import annotations

import json
import logging
import math
from functools import lru_cache
from typing import Any, Optional

import tiktoken

from .logging import get_logger, log_event

ENCODING_NAME = "cl100k_base"

_logger = get_logger("chat_bridge.tokens")


@lru_cache(maxsize=1)
def _get_encoding() -> Optional["tiktoken.Encoding"]:
    try:
        return tiktoken.get_encoding(ENCODING_NAME)
    except Exception as exc:  # network / cache failures surface as assorted errors
        log_event(_logger, "tokens.encoding_unavailable", level=logging.WARNING, encoding=ENCODING_NAME, error=str(exc))
        return None


def input_to_text(value: Any) -> str:
    """Return the text to count for a string, message or request."""
    if isinstance(value, str):
        return value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        value = to_dict()
    return json.dumps(value, ensure_ascii=False, default=str)


def estimate_tokens(value: Any) -> int:
    """Character heuristic: ``ceil(len / 4)``."""
    return math.ceil(len(input_to_text(value)) / 4)


def count_tokens(value: Any) -> int:
    text = input_to_text(value)
    encoding = _get_encoding()
    if encoding is None:
        return math.ceil(len(text) / 4)
    return len(encoding.encode(text, disallowed_special=()))


__all__ = ["count_tokens", "estimate_tokens", "input_to_text", "ENCODING_NAME"]
