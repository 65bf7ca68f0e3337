"""chat_bridge package

Provider-agnostic chat completion layer for multiple LLM platforms.

Purpose:
    Callers speak one OpenAI-shaped request/response schema; provider
    packages translate it to each platform's wire format. Most callers only
    need :class:`ChatOrchestrator` (``await ChatOrchestrator(settings).complete(req)``).

Public API (re-exported):
    - Version: ``__version__``
    - Orchestration: :class:`ChatOrchestrator`, :class:`ChatAdapter`,
      ``ADAPTERS``, :func:`create_adapter`
    - Schema: :class:`ChatRequest`, :class:`ChatMessage`,
      :class:`ChatCompletionResponse`, :class:`ModelInfo`, :class:`ModelOption`
    - Errors: :class:`ProviderError`, :class:`CapabilityError`,
      :class:`StreamBusyError`, :class:`ErrorCode`, :func:`normalize_error`
    - Settings: :class:`ChatSettings`, :class:`AdapterSettings`
"""

from .base.adapter import ChatAdapter
from .base.errors import (
    CapabilityError,
    ErrorCode,
    InvalidStateError,
    NormalizedError,
    ProviderError,
    StreamBusyError,
    normalize_error,
)
from .base.models import (
    ChatCompletionResponse,
    ChatMessage,
    ChatRequest,
    ContentPart,
    ModelInfo,
    ModelOption,
)
from .base.streaming import StreamHandlers
from .config import AdapterSettings, ChatSettings
from .orchestrator import ChatOrchestrator
from .providers import ADAPTERS, UnknownProviderError, create_adapter

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ADAPTERS",
    "AdapterSettings",
    "CapabilityError",
    "ChatAdapter",
    "ChatCompletionResponse",
    "ChatMessage",
    "ChatOrchestrator",
    "ChatRequest",
    "ChatSettings",
    "ContentPart",
    "ErrorCode",
    "InvalidStateError",
    "ModelInfo",
    "ModelOption",
    "NormalizedError",
    "ProviderError",
    "StreamBusyError",
    "StreamHandlers",
    "UnknownProviderError",
    "create_adapter",
    "normalize_error",
]
