"""Password authentication for the loopback TCP transport."""

from __future__ import annotations

import base64
from typing import Mapping

from .logger import BoundLogger, create_logger


def basic_authorization(password: str) -> str:
    """Return the ``Authorization`` value for an empty user and ``password``.

    The daemon expects standard Base64 without ``=`` padding.
    """
    token = base64.b64encode(f":{password}".encode("utf-8")).rstrip(b"=")
    return f"Basic {token.decode('ascii')}"


def parse_basic_authorization(value: str) -> tuple[str, str]:
    """Split a Basic header back into ``(username, password)``."""
    scheme, _, token = value.partition(" ")
    if scheme != "Basic" or not token:
        raise ValueError(f"Not a Basic authorization value: {value!r}")
    padded = token + "=" * (-len(token) % 4)
    decoded = base64.b64decode(padded, validate=True).decode("utf-8")
    username, sep, password = decoded.partition(":")
    if not sep:
        raise ValueError("Basic credentials are missing the ':' separator")
    return username, password


class PasswordAuth:
    """Adds the shared-secret credentials to outgoing request headers."""

    def __init__(self, password: str, logger: BoundLogger | None = None) -> None:
        self._password = password
        self._logger = (logger or create_logger()).child("auth")

    def add_http_headers(self, headers: Mapping[str, str] | None = None) -> dict[str, str]:
        merged = dict(headers or {})
        if not self._password:
            self._logger.debug("Empty password configured for TCP transport")
        merged["Authorization"] = basic_authorization(self._password)
        return merged

    def __repr__(self) -> str:
        return "PasswordAuth(password=***)"


__all__ = ["PasswordAuth", "basic_authorization", "parse_basic_authorization"]
