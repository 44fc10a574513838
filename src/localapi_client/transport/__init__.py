"""Transport implementations exposed to users."""

from .base import HOST_HEADER, Transport, TransportKind, TransportResponse
from .tcp import TcpPasswordTransport
from .unix import UnixSocketTransport

__all__ = [
    "HOST_HEADER",
    "TcpPasswordTransport",
    "Transport",
    "TransportKind",
    "TransportResponse",
    "UnixSocketTransport",
]
