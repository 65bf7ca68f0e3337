"""
Error classification helpers mapping failures to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, and a small
message heuristic for transport exceptions that carry no status.
"""
from __future__ import annotations

import asyncio
import json
from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: object) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception-like object.

    Checked in order: ``status_code``, ``status``, ``http_status`` and
    ``response.status_code``. Returns ``None`` when nothing valid is found.
    """
    for attr in ("status_code", "status", "http_status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_MESSAGE_HINTS = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden")),
    (ErrorCode.RATE_LIMIT, ("rate limit", "too many requests")),
    (ErrorCode.UNSUPPORTED, ("not supported", "unsupported")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
)


def classify_status(status: Optional[int]) -> Optional[ErrorCode]:
    """Map an HTTP status to an :class:`ErrorCode` (``None`` when unmapped)."""
    if status is None:
        return None
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cancellation and timeout exceptions (asyncio and httpx).
        3. HTTP status mapping.
        4. Transport errors without a status are transient.
        5. Undecodable JSON is a parse error.
        6. Substring heuristics, then ``UNKNOWN``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, asyncio.CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    code = classify_status(_extract_status(exc))
    if code is not None:
        return code
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    if isinstance(exc, json.JSONDecodeError):
        return ErrorCode.PARSE
    msg = str(exc).lower()
    for hinted, patterns in _MESSAGE_HINTS:
        if any(p in msg for p in patterns):
            return hinted
    return ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "classify_status",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
