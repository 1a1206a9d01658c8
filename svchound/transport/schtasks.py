# Legacy scheduled task listing through schtasks.exe.
#
# `schtasks /query /fo csv /v` works on every Windows version and can target
# a remote host with /s. Its verbose CSV repeats the header row for each
# task folder and emits one row per trigger, so the parser skips header
# repeats and keeps the first row seen for each task path.

import csv
from io import StringIO
from typing import Dict, List, Optional

from ..auth import AuthContext
from ..models.account import RawTaskEntry
from .process import DEFAULT_TIMEOUT, run_command

SCHTASKS_EXE = "schtasks.exe"

# English column names; positions are used when headers are localized
COLUMNS = {
    "path": ("TaskName", 1),
    "status": ("Status", 3),
    "scheduled_state": ("Scheduled Task State", 11),
    "run_as": ("Run As User", 14),
}


def build_schtasks_command(host: Optional[str] = None, auth: Optional[AuthContext] = None) -> List[str]:
    """Build the schtasks argv, adding /s (and /u /p) for remote hosts."""
    argv = [SCHTASKS_EXE, "/query"]
    if host:
        argv += ["/s", host]
        # /u without /p makes schtasks prompt, so both or neither
        if auth and auth.username and auth.password:
            argv += ["/u", auth.principal, "/p", auth.password]
    argv += ["/fo", "csv", "/v"]
    return argv


def _leaf_name(path: str) -> str:
    return path.rstrip("\\").rsplit("\\", 1)[-1]


def _column_index(header: List[str]) -> Dict[str, int]:
    # Map field -> column index, by English name when present, else by position.
    index = {}
    for field_name, (label, position) in COLUMNS.items():
        index[field_name] = header.index(label) if label in header else position
    return index


def parse_schtasks_csv(text: str) -> List[RawTaskEntry]:
    """Parse `schtasks /query /fo csv /v` output into raw task entries."""
    rows = [row for row in csv.reader(StringIO(text)) if row and any(cell.strip() for cell in row)]
    if not rows:
        return []

    header = rows[0]
    index = _column_index(header)
    width = max(index.values()) + 1

    entries: List[RawTaskEntry] = []
    seen = set()
    for row in rows[1:]:
        if row == header or len(row) < width:
            continue
        path = row[index["path"]].strip()
        if not path or path in seen:
            continue
        seen.add(path)
        entries.append(
            RawTaskEntry(
                path=path,
                name=_leaf_name(path),
                run_as=row[index["run_as"]].strip(),
                scheduled_state=row[index["scheduled_state"]].strip(),
                status=row[index["status"]].strip(),
            )
        )
    return entries


def query_schtasks(
    host: Optional[str] = None,
    auth: Optional[AuthContext] = None,
    interface: str = "schtasks",
    timeout: int = DEFAULT_TIMEOUT,
) -> List[RawTaskEntry]:
    """Run schtasks against the local host (host=None) or a remote one."""
    output = run_command(build_schtasks_command(host, auth), interface, timeout=timeout)
    return parse_schtasks_csv(output)
