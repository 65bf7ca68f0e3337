"""Public Protocol surface for transports and adapter capabilities."""

from .interfaces_parts import (
    Transport,
    TransportResponseLike,
    StreamSource,
    Loadable,
    RequestTranslatable,
    ResponseTranslatable,
    Streamable,
)

__all__ = [
    "Transport",
    "TransportResponseLike",
    "StreamSource",
    "Loadable",
    "RequestTranslatable",
    "ResponseTranslatable",
    "Streamable",
]
