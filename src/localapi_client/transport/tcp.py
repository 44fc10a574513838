"""Loopback TCP transport authenticated with the daemon's shared secret.

Used where the daemon runs sandboxed and only exposes a loopback port plus
a password (macOS, Windows).
"""

from __future__ import annotations

import httpx

from ..auth import PasswordAuth
from ..logger import BoundLogger, create_logger
from .base import Transport, TransportResponse, new_async_client, send_get

LOOPBACK_HOST = "127.0.0.1"


class TcpPasswordTransport:
    kind: Transport.Kind = "tcp"

    def __init__(
        self,
        port: int,
        password: str,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        if not 0 < port < 65536:
            raise ValueError(f"Invalid TCP port: {port}")
        self._port = port
        self._http_transport = http_transport
        self._logger = (logger or create_logger()).child("tcp")
        self._auth = PasswordAuth(password, self._logger)

    @property
    def port(self) -> int:
        return self._port

    async def get(self, target: str) -> TransportResponse:
        headers = self._auth.add_http_headers()
        base_url = f"http://{LOOPBACK_HOST}:{self._port}"
        return await send_get(self._new_client, base_url, target, headers, self._logger)

    def _new_client(self) -> httpx.AsyncClient:
        transport = self._http_transport or httpx.AsyncHTTPTransport(retries=0)
        return new_async_client(transport)

    def __repr__(self) -> str:
        return f"TcpPasswordTransport(port={self._port})"


__all__ = ["LOOPBACK_HOST", "TcpPasswordTransport"]
