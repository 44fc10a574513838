"""Response decoding helpers shared across transports."""

from __future__ import annotations

import json
from typing import Any, Callable, TypeVar

from . import pem
from .errors import ParseError, UnknownCertificateOrKeyError
from .transport.base import TransportResponse
from .types import Certificate, PrivateKey

T = TypeVar("T")


def decode_json(response: TransportResponse, factory: Callable[[Any], T]) -> T:
    """Decode the whole body as JSON and build the expected value from it."""
    try:
        text = (response.body or b"").decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Response body is not valid UTF-8: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON response: {exc}") from exc

    return factory(payload)


def decode_certificate_pair(response: TransportResponse) -> tuple[PrivateKey, list[Certificate]]:
    """Split a PEM bundle into its private key and certificate chain.

    Certificates keep the order they were sent in. When several keys are
    present the last one parsed is returned.
    """
    items = pem.read_all(response.body or b"")
    certificates = [Certificate(item.der) for item in items if item.is_certificate]
    keys = [item for item in items if not item.is_certificate]
    if not keys:
        raise UnknownCertificateOrKeyError("No private key found in certificate pair response")

    # TODO: confirm whether the daemon can ever send more than one key here;
    # if not, reject multiple keys instead of keeping the last.
    last = keys[-1]
    return PrivateKey(last.der, encoding=pem.KEY_LABELS[last.label]), certificates


__all__ = ["decode_certificate_pair", "decode_json"]
