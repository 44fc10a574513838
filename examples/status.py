"""Print the daemon status and, optionally, fetch a certificate pair.

Connects over the Unix socket by default. Set LOCALAPI_PORT and
LOCALAPI_PASSWORD to use the loopback TCP transport instead.
"""

from __future__ import annotations

import asyncio
import os
import sys

from localapi_client import LocalApiClient, LocalApiError
from localapi_client.tasks import wait_detached

SOCKET_PATH = os.getenv("LOCALAPI_SOCKET", "/var/run/tailscale/tailscaled.sock")
PORT = os.getenv("LOCALAPI_PORT")
PASSWORD = os.getenv("LOCALAPI_PASSWORD")


def build_client() -> LocalApiClient:
    if PORT and PASSWORD:
        return LocalApiClient.with_port_and_password(int(PORT), PASSWORD, log_level="debug")
    return LocalApiClient.with_socket_path(SOCKET_PATH, log_level="debug")


async def run(domain: str | None) -> int:
    client = build_client()
    try:
        status = await client.status()
        print(f"backend={status.backend_state} version={status.version}")
        print(f"ips={', '.join(status.tailscale_ips)}")
        for peer in status.peers.values():
            print(f"  peer {peer.host_name:<20} online={peer.online} {' '.join(peer.tailscale_ips)}")

        if domain:
            key, certificates = await client.certificate_pair(domain)
            print(f"key={key.encoding} certificates={len(certificates)}")
    except LocalApiError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    finally:
        await wait_detached()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run(sys.argv[1] if len(sys.argv) > 1 else None)))
