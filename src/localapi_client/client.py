"""High-level client for the local daemon's administrative API."""

from __future__ import annotations

import ipaddress
import os
from dataclasses import dataclass
from typing import Any, Union

from .logger import LogLevel, create_logger
from .parser import decode_certificate_pair, decode_json
from .transport import TcpPasswordTransport, Transport, UnixSocketTransport
from .types import Certificate, PrivateKey, Status, Whois

STATUS_PATH = "/localapi/v0/status"
WHOIS_PATH = "/localapi/v0/whois"
CERT_PATH = "/localapi/v0/cert"

Address = Union[str, tuple[Any, int]]


@dataclass(frozen=True)
class ClientOptions:
    socket_path: str | os.PathLike[str] | None = None
    port: int | None = None
    password: str | None = None
    transport: Transport | None = None
    logger: object | None = None
    log_level: LogLevel = "info"


class LocalApiClient:
    """Entry point for talking to the local daemon.

    The channel is picked once, at construction: a Unix socket path, a
    loopback TCP port with its password, or an explicit transport. Every
    call then opens its own connection, so a single client can be shared by
    any number of concurrent tasks.
    """

    def __init__(
        self,
        *,
        socket_path: str | os.PathLike[str] | None = None,
        port: int | None = None,
        password: str | None = None,
        transport: Transport | None = None,
        logger: object | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        options = ClientOptions(
            socket_path=socket_path,
            port=port,
            password=password,
            transport=transport,
            logger=logger,
            log_level=log_level,
        )
        self._logger = create_logger(logger=options.logger, level=options.log_level)
        self._transport = self._create_transport(options)
        self._logger.info("Initialized LocalApiClient over %s", self._transport.kind)

    @classmethod
    def with_socket_path(cls, socket_path: str | os.PathLike[str], **kwargs: Any) -> "LocalApiClient":
        return cls(socket_path=socket_path, **kwargs)

    @classmethod
    def with_port_and_password(cls, port: int, password: str, **kwargs: Any) -> "LocalApiClient":
        return cls(port=port, password=password, **kwargs)

    @property
    def transport(self) -> Transport:
        return self._transport

    async def status(self) -> Status:
        """Return the status of the local node."""
        response = await self._transport.get(STATUS_PATH)
        return decode_json(response, Status.from_dict)

    async def whois(self, address: Address) -> Whois:
        """Look up the node and user behind ``address`` (``"ip:port"`` or ``(ip, port)``)."""
        target = f"{WHOIS_PATH}?addr={format_address(address)}"
        response = await self._transport.get(target)
        return decode_json(response, Whois.from_dict)

    async def certificate_pair(self, domain: str) -> tuple[PrivateKey, list[Certificate]]:
        """Fetch the private key and certificate chain for ``domain``.

        ``domain`` goes into the path as given; it must be one of the
        domains the daemon serves certificates for.
        """
        response = await self._transport.get(f"{CERT_PATH}/{domain}?type=pair")
        return decode_certificate_pair(response)

    def _create_transport(self, options: ClientOptions) -> Transport:
        has_socket = options.socket_path is not None
        has_tcp = options.port is not None or options.password is not None

        if options.transport is not None:
            if has_socket or has_tcp:
                raise ValueError("Pass either a transport or connection settings, not both")
            return options.transport

        if has_socket and has_tcp:
            raise ValueError("Pass either socket_path or port and password, not both")

        socket_path = options.socket_path
        if socket_path is not None:
            return UnixSocketTransport(socket_path, logger=self._logger)

        if has_tcp:
            if options.port is None or options.password is None:
                raise ValueError("TCP connections need both port and password")
            return TcpPasswordTransport(options.port, options.password, logger=self._logger)

        raise ValueError("One of socket_path, port and password, or transport is required")

    def __repr__(self) -> str:
        return f"LocalApiClient(transport={self._transport!r})"


def format_address(address: Address) -> str:
    """Render an address as ``ip:port``, bracketing IPv6 hosts.

    Strings must already be an ``ip:port`` or ``[ipv6]:port`` literal; anything
    else raises ``ValueError`` rather than leaking into the query string.
    """
    if isinstance(address, str):
        host, port = _split_address(address)
    else:
        host, port = address
    ip = ipaddress.ip_address(host)
    if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
        raise ValueError(f"Invalid port in address: {port!r}")
    if ip.version == 6:
        return f"[{ip}]:{port}"
    return f"{ip}:{port}"


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port_text = address.rpartition(":")
    if not sep or not (port_text.isascii() and port_text.isdigit()):
        raise ValueError(f"Address must be ip:port, got {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
        if ipaddress.ip_address(host).version != 6:
            raise ValueError(f"Only IPv6 hosts are bracketed: {address!r}")
    elif ":" in host:
        raise ValueError(f"IPv6 hosts must be bracketed: {address!r}")
    return host, int(port_text)


__all__ = ["ClientOptions", "LocalApiClient", "format_address"]
