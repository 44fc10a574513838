"""Custom exceptions raised by the Local API client."""

from __future__ import annotations

from typing import Any


class LocalApiError(Exception):
    """Base error for all client failures."""

    def __init__(self, message: str, *, context: Any | None = None) -> None:
        super().__init__(message)
        self.context = context


class ConnectionError(LocalApiError):
    """Raised when the client cannot reach the daemon."""


class ProtocolError(LocalApiError):
    """Raised when the HTTP exchange with the daemon breaks down."""


class UnprocessableEntityError(LocalApiError):
    """Raised for any response whose status is not 200.

    The status code is available as ``context``; the body is discarded.
    """

    @property
    def status(self) -> int | None:
        return self.context


class DecodeError(LocalApiError):
    """Raised when a response body cannot be decoded."""


class ParseError(DecodeError):
    """Raised when a JSON body is malformed or does not match the schema."""


class UnknownCertificateOrKeyError(DecodeError):
    """Raised when PEM content is missing a key or holds an unknown block."""


__all__ = [
    "ConnectionError",
    "DecodeError",
    "LocalApiError",
    "ParseError",
    "ProtocolError",
    "UnknownCertificateOrKeyError",
    "UnprocessableEntityError",
]
