"""
Structured provider error exception type.

Wraps provider failures with a normalized :class:`ErrorCode` plus the
``details``/``http_status`` pair produced by :func:`normalize_error`, so a
caller sees one shape regardless of which provider failed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode
from .normalized_error import NormalizedError


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Adapter key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception or payload for diagnostics.
        details: Extra JSON-serializable fields from the provider payload.
        http_status: HTTP status when the transport supplied one.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Any = None
    details: Optional[Dict[str, Any]] = None
    http_status: Optional[int] = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"

    def __hash__(self) -> int:  # dataclass eq would otherwise disable hashing
        return id(self)

    def to_normalized(self) -> NormalizedError:
        return NormalizedError(message=self.message, details=self.details, http_status=self.http_status)

    @classmethod
    def from_normalized(
        cls,
        err: NormalizedError,
        *,
        provider: str,
        model: Optional[str] = None,
        code: Optional[ErrorCode] = None,
    ) -> "ProviderError":
        """Build the raised exception for a normalized error."""
        from .classification import classify_status

        resolved = code or classify_status(err.http_status) or ErrorCode.UNKNOWN
        return cls(
            code=resolved,
            message=err.message,
            provider=provider,
            model=model,
            retryable=resolved in (ErrorCode.RATE_LIMIT, ErrorCode.TRANSIENT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE),
            details=err.details,
            http_status=err.http_status,
        )


__all__ = ["ProviderError"]
