"""Unified error taxonomy and normalizer public surface.

Re-exports the one-class-per-file implementations under
``chat_bridge.base.errors_parts``.
"""

from .errors_parts import (
    ErrorCode,
    NormalizedError,
    ProviderError,
    CapabilityError,
    StreamBusyError,
    InvalidStateError,
    classify_exception,
    classify_status,
    normalize_error,
)

__all__ = [
    "ErrorCode",
    "NormalizedError",
    "ProviderError",
    "CapabilityError",
    "StreamBusyError",
    "InvalidStateError",
    "classify_exception",
    "classify_status",
    "normalize_error",
]
