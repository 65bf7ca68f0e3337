"""
chat_bridge base package

Exports the provider-agnostic pieces every adapter is built from:

- Models: canonical OpenAI-shaped request/response dataclasses
- Errors: normalizer and error taxonomy
- Lifecycle: load/unload state machine
- Translation: OpenAI-shaped translators reused by provider packages
- Streaming: the per-adapter stream controller
- Catalog: model catalog cache, registry index and enrichment
- Adapter: the generic adapter driven by a provider definition
"""

from .models import (
    ChatCompletionResponse,
    ChatMessage,
    ChatRequest,
    Choice,
    ContentPart,
    ModelInfo,
    ModelOption,
    ProviderConfig,
    Tool,
    ToolCall,
    TransportRequest,
    Usage,
)
from .errors import (
    CapabilityError,
    ErrorCode,
    InvalidStateError,
    NormalizedError,
    ProviderError,
    StreamBusyError,
    normalize_error,
)
from .lifecycle import AdapterState, Lifecycle
from .timeouts import TimeoutConfig, get_timeout_config
from .streaming import StreamController, StreamHandlers, StreamState
from .catalog import ModelCatalogCache, ModelRegistryIndex, get_default_catalog_cache
from .provider_definition import ProviderDefinition
from .adapter import ChatAdapter

__all__ = [
    # Models
    "ChatCompletionResponse",
    "ChatMessage",
    "ChatRequest",
    "Choice",
    "ContentPart",
    "ModelInfo",
    "ModelOption",
    "ProviderConfig",
    "Tool",
    "ToolCall",
    "TransportRequest",
    "Usage",
    # Errors
    "CapabilityError",
    "ErrorCode",
    "InvalidStateError",
    "NormalizedError",
    "ProviderError",
    "StreamBusyError",
    "normalize_error",
    # Lifecycle
    "AdapterState",
    "Lifecycle",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
    # Streaming
    "StreamController",
    "StreamHandlers",
    "StreamState",
    # Catalog
    "ModelCatalogCache",
    "ModelRegistryIndex",
    "get_default_catalog_cache",
    # Adapter
    "ProviderDefinition",
    "ChatAdapter",
]
