# Host reachability probe.
#
# SvcHound only needs a yes/no answer before it starts talking to a host.
# A host counts as reachable when any of the management ports accepts a
# TCP connection within the timeout.

import socket
from typing import Iterable

from .logging import debug

# SMB, RPC endpoint mapper, WinRM over HTTP and HTTPS
MANAGEMENT_PORTS = (445, 135, 5985, 5986)


def is_reachable(host: str, ports: Iterable[int] = MANAGEMENT_PORTS, timeout: float = 3.0) -> bool:
    """Return True if any of `ports` on `host` accepts a TCP connection."""
    for port in ports:
        try:
            with socket.create_connection((host, port), timeout=timeout):
                debug(f"{host}: port {port} open")
                return True
        except OSError as e:
            debug(f"{host}: port {port} closed ({e})")
    return False
