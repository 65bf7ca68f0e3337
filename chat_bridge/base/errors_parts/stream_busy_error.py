"""Error raised when a stream is requested while another is still open."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class StreamBusyError(ProviderError):
    code: ErrorCode = field(default=ErrorCode.CONFLICT)
    message: str = "A stream is already active; call stop_stream() first"
    provider: str = "unknown"

    def __hash__(self) -> int:
        return id(self)


__all__ = ["StreamBusyError"]
