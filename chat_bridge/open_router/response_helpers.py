"""OpenRouter response translation.

OpenRouter wraps upstream failures: the upstream body sits in
``error.metadata.raw`` and is appended to the message. Cookie-auth failures
mean the key is missing or wrong, which is surfaced as ``suggested_action``.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from ..base.errors import NormalizedError, normalize_error
from ..base.translation import OpenAIResponseTranslator

COOKIE_AUTH_PREFIX = "No cookie auth"
KEY_SUGGESTION = "Ensure your Open Router API key is set correctly."


def expand_error(error: Any) -> Any:
    if not isinstance(error, Mapping):
        return error
    expanded = dict(error)
    message = expanded.get("message") or ""
    raw = (expanded.get("metadata") or {}).get("raw")
    if raw:
        message += "\n\n" + (raw if isinstance(raw, str) else json.dumps(raw, indent=2))
    if message.startswith(COOKIE_AUTH_PREFIX):
        expanded["suggested_action"] = KEY_SUGGESTION
    expanded["message"] = message
    return expanded


class OpenRouterResponseTranslator(OpenAIResponseTranslator):
    def normalize_error(self, error: Any, status: Optional[int] = None) -> NormalizedError:
        return normalize_error(expand_error(error), status)


__all__ = ["OpenRouterResponseTranslator", "expand_error", "KEY_SUGGESTION"]
