"""Errors parts package public surface.

Prefer importing from ``chat_bridge.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .normalized_error import NormalizedError
from .provider_error import ProviderError
from .capability_error import CapabilityError
from .stream_busy_error import StreamBusyError
from .invalid_state_error import InvalidStateError
from .classification import classify_exception, classify_status
from .normalize import normalize_error

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
