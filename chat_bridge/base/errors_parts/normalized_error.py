"""
Normalized error value object.

Every failure surfaced to callers, whichever provider produced it, takes this
one shape. ``details`` is ``None`` when there is nothing beyond the message.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class NormalizedError:
    message: str
    details: Optional[Dict[str, Any]] = None
    http_status: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"message": self.message, "details": self.details}
        if self.http_status is not None:
            data["http_status"] = self.http_status
        return data


__all__ = ["NormalizedError"]
