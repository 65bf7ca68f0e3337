"""Lifecycle state error.

Raised synchronously when code attempts to set a lifecycle state outside the
recognized set. This is a programming error and is never swallowed.
"""
from __future__ import annotations


class InvalidStateError(ValueError):
    """Raised for an unrecognized lifecycle state value."""

    def __init__(self, state: object) -> None:
        super().__init__(f"Invalid state: {state!r}")
        self.state = state


__all__ = ["InvalidStateError"]
