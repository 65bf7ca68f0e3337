"""Streaming package: controller, handlers and states."""

from .stream_state import StreamState
from .stream_handlers import StreamHandlers
from .stream_controller import StreamController, StreamRun

__all__ = ["StreamState", "StreamHandlers", "StreamController", "StreamRun"]
