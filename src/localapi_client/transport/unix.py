"""Unix domain socket transport for same-host, unsandboxed processes."""

from __future__ import annotations

import os

import httpx

from ..logger import BoundLogger, create_logger
from .base import HOST_HEADER, Transport, TransportResponse, new_async_client, send_get


class UnixSocketTransport:
    kind: Transport.Kind = "unix"

    def __init__(
        self,
        socket_path: str | os.PathLike[str],
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._socket_path = os.fspath(socket_path)
        self._http_transport = http_transport
        self._logger = (logger or create_logger()).child("unix")

    @property
    def socket_path(self) -> str:
        return self._socket_path

    async def get(self, target: str) -> TransportResponse:
        self._logger.trace("Dialing unix socket %s", self._socket_path)
        return await send_get(self._new_client, f"http://{HOST_HEADER}", target, {}, self._logger)

    def _new_client(self) -> httpx.AsyncClient:
        transport = self._http_transport or httpx.AsyncHTTPTransport(uds=self._socket_path, retries=0)
        return new_async_client(transport)

    def __repr__(self) -> str:
        return f"UnixSocketTransport(socket_path={self._socket_path!r})"


__all__ = ["UnixSocketTransport"]
