"""HTTP transport package (pooled httpx client and transport collaborator)."""

from .client import get_httpx_client, close_all_clients
from .transport import HttpxTransport, HttpxResponse, HttpxStreamSource

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "HttpxTransport",
    "HttpxResponse",
    "HttpxStreamSource",
]
