"""Interface parts package (Protocols)."""

from .transport import Transport, TransportResponseLike, StreamSource
from .capabilities import Loadable, RequestTranslatable, ResponseTranslatable, Streamable

__all__ = [
    "Transport",
    "TransportResponseLike",
    "StreamSource",
    "Loadable",
    "RequestTranslatable",
    "ResponseTranslatable",
    "Streamable",
]
