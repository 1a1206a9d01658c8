# OS capability probe.
#
# Hosts running Windows 8 / Server 2012 (NT 6.2) or later ship CIM over
# WinRM and the ScheduledTasks PowerShell module. Anything older, or any
# host whose version cannot be determined, is treated as legacy and only
# queried through WMI/DCOM and schtasks.exe.

import platform
import re
from typing import Optional, Tuple, Union

from .auth import AuthContext
from .exceptions import QueryError
from .models.strategy import Capability
from .transport.smb import smb_os_version
from .transport.wmi import wmi_query
from .utils.logging import debug

MODERN_MIN_VERSION = (6, 2)

_VERSION_RE = re.compile(r"(\d+)\.(\d+)")

VersionLike = Union[str, float, int, Tuple[int, int], None]


def parse_os_version(value: VersionLike) -> Optional[Tuple[int, int]]:
    """
    Normalize an OS version to a (major, minor) tuple.

    Accepts "6.1.7601", "10.0", 6.3, 10, or an existing tuple. Returns None
    when nothing version-like can be found.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, tuple):
        if len(value) >= 2:
            return int(value[0]), int(value[1])
        return None
    if isinstance(value, int):
        return value, 0
    m = _VERSION_RE.search(str(value))
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def classify_os_version(version: VersionLike) -> Capability:
    """Modern for NT 6.2 and later, Legacy otherwise (including unknown)."""
    parsed = parse_os_version(version)
    if parsed is not None and parsed >= MODERN_MIN_VERSION:
        return Capability.MODERN
    return Capability.LEGACY


def local_os_version() -> Optional[Tuple[int, int]]:
    """Version of the control host, or None when it is not Windows."""
    if platform.system() != "Windows":
        return None
    return parse_os_version(platform.version())


def remote_os_version(host: str, auth: AuthContext) -> Optional[Tuple[int, int]]:
    """
    Ask `host` for its OS version.

    SMB session setup is tried first (cheap, no WMI needed); when it yields
    nothing the Win32_OperatingSystem class is read over DCOM.
    """
    try:
        version = smb_os_version(host, auth)
        if version:
            return version
    except Exception as e:  # noqa: BLE001 - impacket raises SessionError, socket errors, NetBIOS errors
        debug(f"{host}: SMB version probe failed: {e}")

    try:
        rows = wmi_query(host, auth, "SELECT Version FROM Win32_OperatingSystem", interface="WMI/DCOM version")
    except QueryError as e:
        debug(f"{host}: WMI version probe failed: {e}")
        return None
    for row in rows:
        parsed = parse_os_version(row.get("Version"))
        if parsed:
            return parsed
    return None
