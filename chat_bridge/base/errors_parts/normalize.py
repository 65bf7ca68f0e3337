"""
Error normalizer.

Collapses whatever a provider, the transport, or a parser throws or returns
into one :class:`NormalizedError`. Rules, applied recursively:

1. A non-empty list/tuple normalizes its first element.
2. ``None`` becomes ``"Unknown error"``.
3. A string is the message.
4. An exception contributes its trimmed message plus its JSON-serializable
   attributes as ``details``.
5. A mapping with a nested ``error`` recurses into it; when the nested value is
   itself a mapping, the outer fields (minus ``message``/``error``) are merged
   underneath it and the nested fields win on collision.
6. A mapping with a non-empty ``message`` uses it, remaining serializable
   fields become ``details``.
7. Anything else is ``"Unknown error"``.

``http_status`` passed in explicitly always wins; otherwise it is picked up
from an ``http_status`` key or the exception's status attributes. ``details``
is ``None`` rather than an empty mapping. Normalizing a normalized error
returns it unchanged.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from .classification import _extract_status
from .normalized_error import NormalizedError
from .provider_error import ProviderError

UNKNOWN_MESSAGE = "Unknown error"
_NORMALIZED_KEYS = frozenset({"message", "details", "http_status"})


def _is_serializable(value: Any) -> bool:
    try:
        json.dumps(value)
    except (TypeError, ValueError, RecursionError):
        return False
    return True


def _serializable_fields(data: Mapping[str, Any], exclude: frozenset) -> Dict[str, Any]:
    return {
        str(k): v
        for k, v in data.items()
        if k not in exclude and _is_serializable(v)
    }


def _status_from(data: Mapping[str, Any]) -> Optional[int]:
    value = data.get("http_status")
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def _looks_normalized(data: Mapping[str, Any]) -> bool:
    return (
        isinstance(data.get("message"), str)
        and bool(data["message"])
        and set(data.keys()) <= _NORMALIZED_KEYS
        and (data.get("details") is None or isinstance(data.get("details"), Mapping))
    )


def normalize_error(error: Any, http_status: Optional[int] = None) -> NormalizedError:
    """Normalize an arbitrary error value.

    Parameters:
        error: Exception, string, mapping, sequence or anything else.
        http_status: Optional status code to attach.

    Returns:
        A :class:`NormalizedError`.
    """
    if isinstance(error, NormalizedError):
        if http_status is None or http_status == error.http_status:
            return error
        return NormalizedError(error.message, error.details, http_status)

    if isinstance(error, (list, tuple)):
        if error:
            return normalize_error(error[0], http_status)
        return NormalizedError(UNKNOWN_MESSAGE, None, http_status)

    if error is None:
        return NormalizedError(UNKNOWN_MESSAGE, None, http_status)

    if isinstance(error, str):
        return NormalizedError(error, None, http_status)

    if isinstance(error, ProviderError):
        status = http_status if http_status is not None else error.http_status
        return NormalizedError(error.message, error.details or None, status)

    if isinstance(error, BaseException):
        status = http_status if http_status is not None else _extract_status(error)
        message = getattr(error, "message", None)
        if not isinstance(message, str) or not message.strip():
            message = str(error)
        message = message.strip() or type(error).__name__
        details = _serializable_fields(vars(error), frozenset({"message", "args"}))
        return NormalizedError(message, details or None, status)

    if isinstance(error, Mapping):
        status = http_status if http_status is not None else _status_from(error)
        if _looks_normalized(error):
            return NormalizedError(error["message"], dict(error["details"]) if error.get("details") else None, status)
        nested = error.get("error")
        if nested is not None:
            if isinstance(nested, Mapping):
                outer = _serializable_fields(error, frozenset({"message", "error", "http_status"}))
                return normalize_error({**outer, **nested}, status)
            return normalize_error(nested, status)
        message = error.get("message")
        if isinstance(message, str) and message:
            details = _serializable_fields(error, frozenset({"message", "http_status"}))
            return NormalizedError(message, details or None, status)
        return NormalizedError(UNKNOWN_MESSAGE, None, status)

    return NormalizedError(UNKNOWN_MESSAGE, None, http_status)


__all__ = ["normalize_error", "UNKNOWN_MESSAGE"]
