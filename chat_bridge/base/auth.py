"""Authorization header construction shared by every request translator.

Three modes, selected by ``api_key_header``:

* ``None``: ``Authorization: <scheme> <key>`` (bearer by default);
* ``"none"``: no auth header at all (key in URL, local servers);
* any other string: the key is sent under that header name.

A missing key does not raise. The headers are returned without auth and an
``auth.missing_key`` warning is logged so the unauthenticated call fails at
the provider, where the error is normalized like any other.
"""
from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from .logging import LogContext, get_logger, log_event

NO_AUTH_HEADER = "none"

_logger = get_logger("chat_bridge.auth")


def build_auth_headers(
    api_key: Optional[str],
    api_key_header: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
    *,
    warn_missing: bool = True,
    auth_scheme: str = "Bearer",
    provider: Optional[str] = None,
) -> Dict[str, str]:
    """Return ``headers`` plus the auth header for ``api_key``.

    Parameters:
        api_key: Credential (may be ``None``).
        api_key_header: ``None`` for scheme auth, ``"none"`` to opt out, or a
            custom header name.
        headers: Base headers (copied, never mutated).
        warn_missing: Log a warning when the key is absent.
        auth_scheme: Scheme used for the ``Authorization`` header.
        provider: Adapter key for log context.
    """
    out: Dict[str, str] = dict(headers or {})
    if api_key_header == NO_AUTH_HEADER:
        return out
    if not api_key:
        if warn_missing:
            log_event(
                _logger,
                "auth.missing_key",
                LogContext(provider=provider),
                level=logging.WARNING,
                header=api_key_header or "Authorization",
            )
        return out
    if api_key_header:
        out[api_key_header] = api_key
    else:
        out["Authorization"] = f"{auth_scheme} {api_key}"
    return out


__all__ = ["build_auth_headers", "NO_AUTH_HEADER"]
