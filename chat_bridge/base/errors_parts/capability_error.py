"""
Capability error raised by request translators.

Signals that a request uses a feature the target provider cannot accept
(image parts on a text-only API, for instance). It is raised before any
network call is made.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class CapabilityError(ProviderError):
    """Unsupported capability for the selected provider."""

    code: ErrorCode = field(default=ErrorCode.UNSUPPORTED)
    message: str = "Unsupported capability"
    provider: str = "unknown"

    def __hash__(self) -> int:
        return id(self)


__all__ = ["CapabilityError"]
