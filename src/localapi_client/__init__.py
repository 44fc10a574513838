"""Public surface for the Local API client."""

from .client import ClientOptions, LocalApiClient
from .errors import (
    ConnectionError,
    DecodeError,
    LocalApiError,
    ParseError,
    ProtocolError,
    UnknownCertificateOrKeyError,
    UnprocessableEntityError,
)
from .transport import TcpPasswordTransport, Transport, TransportResponse, UnixSocketTransport
from .types import Certificate, Node, PeerStatus, PrivateKey, Status, UserProfile, Whois
from .version import __version__

__all__ = [
    "__version__",
    "Certificate",
    "ClientOptions",
    "ConnectionError",
    "DecodeError",
    "LocalApiClient",
    "LocalApiError",
    "Node",
    "ParseError",
    "PeerStatus",
    "PrivateKey",
    "ProtocolError",
    "Status",
    "TcpPasswordTransport",
    "Transport",
    "TransportResponse",
    "UnixSocketTransport",
    "UnknownCertificateOrKeyError",
    "UnprocessableEntityError",
    "UserProfile",
    "Whois",
]
