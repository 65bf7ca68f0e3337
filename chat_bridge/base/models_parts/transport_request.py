"""
Transport-level request produced by request translators.

The core never opens sockets; it hands this record to the transport
collaborator. ``body`` is already JSON-encoded.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class TransportRequest:
    url: str
    method: str = "POST"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def json_body(self) -> Any:
        """Decode ``body`` (``None`` when empty)."""
        return json.loads(self.body) if self.body else None


__all__ = ["TransportRequest"]
