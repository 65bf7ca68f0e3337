"""Stream states: ``idle -> open -> accumulating* -> done | error``."""
from __future__ import annotations

from enum import Enum


class StreamState(str, Enum):
    IDLE = "idle"
    OPEN = "open"
    ACCUMULATING = "accumulating"
    DONE = "done"
    ERROR = "error"


ACTIVE_STATES = frozenset({StreamState.OPEN, StreamState.ACCUMULATING})

__all__ = ["StreamState", "ACTIVE_STATES"]
