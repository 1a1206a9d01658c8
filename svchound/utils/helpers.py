# Small helpers used across the codebase.
#
# Local host detection and target list handling.

import socket
from typing import Iterable, List

# Names that always refer to the machine SvcHound is running on
LOCAL_ALIASES = frozenset({"", ".", "localhost", "127.0.0.1", "::1"})


def local_hostname() -> str:
    """Short NetBIOS-style name of the control host (upper case)."""
    return socket.gethostname().split(".")[0].upper()


def is_local_host(name: str) -> bool:
    """
    Check whether `name` designates the machine we are running on.

    Matches the loopback aliases and the local hostname, short or fully
    qualified, case-insensitively.
    """
    candidate = (name or "").strip().lower()
    if candidate in LOCAL_ALIASES:
        return True

    hostname = socket.gethostname().lower()
    short = hostname.split(".")[0]
    if candidate in (hostname, short):
        return True

    try:
        return candidate == socket.getfqdn().lower()
    except OSError:
        return False


def normalize_targets(targets: Iterable[str]) -> List[str]:
    """Strip whitespace and drop empty entries, keeping the given order.

    Duplicates are kept: the host list is processed exactly as supplied.
    """
    out = []
    for t in targets:
        t = t.strip()
        if t:
            out.append(t)
    return out
