"""Minimal PEM reader.

Splits a byte stream into ``-----BEGIN <label>-----`` / ``-----END <label>-----``
sections and base64-decodes each body. Text between sections is ignored.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Iterator, Literal

from .errors import UnknownCertificateOrKeyError

PemKind = Literal["certificate", "key"]

CERTIFICATE_LABELS = frozenset({"CERTIFICATE"})
KEY_LABELS: dict[str, str] = {
    "RSA PRIVATE KEY": "rsa",
    "PRIVATE KEY": "pkcs8",
    "EC PRIVATE KEY": "ec",
}

_BEGIN = re.compile(rb"^-----BEGIN ([A-Z0-9 ]+)-----\s*$")
_END = re.compile(rb"^-----END ([A-Z0-9 ]+)-----\s*$")


@dataclass(frozen=True)
class PemItem:
    kind: PemKind
    label: str
    der: bytes

    @property
    def is_certificate(self) -> bool:
        return self.kind == "certificate"


def read_sections(data: bytes) -> Iterator[tuple[str, bytes]]:
    """Yield ``(label, der)`` for every PEM section in ``data``."""
    label: bytes | None = None
    chunks: list[bytes] = []

    for line in data.splitlines():
        stripped = line.strip()
        if label is None:
            begin = _BEGIN.match(stripped)
            if begin:
                label = begin.group(1)
                chunks = []
            continue

        end = _END.match(stripped)
        if end:
            if end.group(1) != label:
                raise UnknownCertificateOrKeyError(
                    f"PEM section {label.decode()!r} closed by {end.group(1).decode()!r}"
                )
            yield label.decode("ascii"), _decode_body(label, chunks)
            label = None
            continue
        chunks.append(stripped)

    if label is not None:
        raise UnknownCertificateOrKeyError(f"PEM section {label.decode()!r} has no END line")


def read_all(data: bytes) -> list[PemItem]:
    """Classify every section as a certificate or a key.

    Labels other than a certificate or a recognized private key encoding are
    rejected rather than skipped.
    """
    items: list[PemItem] = []
    for label, der in read_sections(data):
        if label in CERTIFICATE_LABELS:
            items.append(PemItem("certificate", label, der))
        elif label in KEY_LABELS:
            items.append(PemItem("key", label, der))
        else:
            raise UnknownCertificateOrKeyError(f"Unsupported PEM section {label!r}", context=label)
    return items


def encode(label: str, der: bytes) -> str:
    """Re-encode DER bytes as a PEM section with 64 character lines."""
    text = base64.b64encode(der).decode("ascii")
    lines = [text[i : i + 64] for i in range(0, len(text), 64)]
    return "\n".join([f"-----BEGIN {label}-----", *lines, f"-----END {label}-----", ""])


def _decode_body(label: bytes, chunks: list[bytes]) -> bytes:
    try:
        return base64.b64decode(b"".join(chunks), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise UnknownCertificateOrKeyError(
            f"PEM section {label.decode()!r} is not valid base64"
        ) from exc


__all__ = ["CERTIFICATE_LABELS", "KEY_LABELS", "PemItem", "PemKind", "encode", "read_all", "read_sections"]
