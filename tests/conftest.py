import asyncio
import base64
import contextlib
import os
import shutil
import socket
import tempfile
from dataclasses import dataclass, field
from http import HTTPStatus

import pytest

from localapi_client.tasks import wait_detached


@dataclass
class RecordedRequest:
    method: str
    target: str
    version: str
    headers: dict[str, str] = field(default_factory=dict)


class FakeDaemon:
    """Answers every connection with one canned HTTP/1.1 response, then hangs up."""

    def __init__(
        self,
        status: int = 200,
        body: bytes = b"",
        content_type: str = "application/json",
        extra_headers: dict[str, str] | None = None,
    ) -> None:
        self.status = status
        self.body = body
        self.content_type = content_type
        self.extra_headers = dict(extra_headers or {})
        self.requests: list[RecordedRequest] = []
        self.connections = 0
        self.port: int | None = None
        self._server: asyncio.AbstractServer | None = None

    async def start_unix(self, path: str) -> "FakeDaemon":
        self._server = await asyncio.start_unix_server(self._handle, path=path)
        return self

    async def start_tcp(self) -> "FakeDaemon":
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]
        return self

    async def __aenter__(self) -> "FakeDaemon":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await wait_detached()
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.connections += 1
        try:
            head = await reader.readuntil(b"\r\n\r\n")
        except (asyncio.IncompleteReadError, asyncio.LimitOverrunError):
            writer.close()
            return

        request_line, *header_lines = head.decode("latin-1").split("\r\n")
        method, target, version = request_line.split(" ", 2)
        headers = {}
        for line in header_lines:
            if not line:
                continue
            name, _, value = line.partition(":")
            headers[name.strip().lower()] = value.strip()
        self.requests.append(RecordedRequest(method, target, version, headers))

        reason = HTTPStatus(self.status).phrase
        response_headers = {
            "Content-Type": self.content_type,
            "Content-Length": str(len(self.body)),
            **self.extra_headers,
            "Connection": "close",
        }
        head_out = f"HTTP/1.1 {self.status} {reason}\r\n"
        head_out += "".join(f"{name}: {value}\r\n" for name, value in response_headers.items())
        head_out += "\r\n"
        writer.write(head_out.encode("latin-1") + self.body)
        with contextlib.suppress(ConnectionError):
            await writer.drain()
        writer.close()
        with contextlib.suppress(ConnectionError):
            await writer.wait_closed()


unix_only = pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="Unix sockets unavailable")


@pytest.fixture
def socket_path():
    # Unix socket paths are limited to ~104 bytes, so stay out of pytest's tmp_path.
    directory = tempfile.mkdtemp(prefix="lapi-")
    yield os.path.join(directory, "daemon.sock")
    shutil.rmtree(directory, ignore_errors=True)


def pem_block(label: str, payload: bytes) -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    lines = [encoded[i : i + 64] for i in range(0, len(encoded), 64)]
    return "\n".join([f"-----BEGIN {label}-----", *lines, f"-----END {label}-----"]) + "\n"


STATUS_PAYLOAD = {
    "Version": "1.58.2",
    "BackendState": "Running",
    "AuthURL": "",
    "TailscaleIPs": ["100.101.102.103", "fd7a:115c:a1e0::1"],
    "Self": {
        "ID": "n1",
        "PublicKey": "nodekey:abc",
        "HostName": "laptop",
        "DNSName": "laptop.example.ts.net.",
        "OS": "linux",
        "UserID": 42,
        "TailscaleIPs": ["100.101.102.103"],
        "Online": True,
    },
    "MagicDNSSuffix": "example.ts.net",
    "CertDomains": ["laptop.example.ts.net"],
    "Peer": {
        "nodekey:def": {
            "ID": "n2",
            "HostName": "server",
            "DNSName": "server.example.ts.net.",
            "OS": "linux",
            "UserID": 42,
            "TailscaleIPs": ["100.64.0.2"],
            "Online": False,
        }
    },
    "User": {"42": {"ID": 42, "LoginName": "alice@example.com", "DisplayName": "Alice"}},
}

WHOIS_PAYLOAD = {
    "Node": {
        "ID": 7,
        "StableID": "nStable7",
        "Name": "server.example.ts.net.",
        "User": 42,
        "Addresses": ["100.64.0.2/32"],
        "ComputedName": "server",
    },
    "UserProfile": {"ID": 42, "LoginName": "alice@example.com", "DisplayName": "Alice"},
}
