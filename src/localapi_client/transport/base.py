"""Common transport abstractions and the per-call request pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Mapping, Protocol, runtime_checkable

import httpx

from ..errors import ConnectionError, ProtocolError, UnprocessableEntityError
from ..logger import BoundLogger
from ..tasks import spawn_detached

TransportKind = Literal["unix", "tcp"]

# The daemon routes on this Host value whatever the channel is.
HOST_HEADER = "local-daemon.sock"


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)


@runtime_checkable
class Transport(Protocol):
    Kind = TransportKind

    @property
    def kind(self) -> TransportKind: ...

    async def get(self, target: str) -> TransportResponse: ...


ClientFactory = Callable[[], httpx.AsyncClient]


def new_async_client(transport: httpx.AsyncBaseTransport) -> httpx.AsyncClient:
    """Build a single-use client: no proxies from the environment, no redirects, no timeout."""
    return httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(None),
        follow_redirects=False,
        trust_env=False,
    )


async def send_get(
    client_factory: ClientFactory,
    base_url: str,
    target: str,
    headers: Mapping[str, str],
    logger: BoundLogger,
) -> TransportResponse:
    """Open a fresh connection, send one GET and return the buffered 200 response.

    ``target`` goes on the request line byte for byte; httpx would otherwise
    collapse dot segments and re-quote the path.

    The client is closed by a detached task once the exchange is over, so a
    failure while tearing the connection down is only logged.
    """
    request_headers = {"Host": HOST_HEADER}
    request_headers.update(headers)

    url = f"{base_url}{target}"
    client = client_factory()
    try:
        logger.debug("GET %s", url)
        request = client.build_request(
            "GET",
            url,
            headers=request_headers,
            extensions={"target": target.encode("utf-8")},
        )
        response = await client.send(request, stream=True)
        try:
            if response.status_code != 200:
                logger.debug("<- %s status=%s (discarding body)", url, response.status_code)
                raise UnprocessableEntityError(
                    f"Daemon answered {response.status_code} for {url}",
                    context=response.status_code,
                )
            body = await response.aread()
        finally:
            await response.aclose()
        logger.debug("<- %s status=200 bytes=%d", url, len(body))
        return TransportResponse(
            status=response.status_code,
            body=body,
            headers={k.lower(): v for k, v in response.headers.items()},
        )
    except httpx.ConnectError as exc:
        raise ConnectionError(f"Cannot connect to daemon: {exc}") from exc
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise ProtocolError(f"Request to {url} failed: {exc}") from exc
    except OSError as exc:
        raise ConnectionError(f"Cannot connect to daemon: {exc}") from exc
    finally:
        spawn_detached(client.aclose(), logger, name=f"close {url}")


__all__ = [
    "HOST_HEADER",
    "Transport",
    "TransportKind",
    "TransportResponse",
    "new_async_client",
    "send_get",
]
