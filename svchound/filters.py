# Identity and name filters.
#
# Pure predicates used by the service and task sources to tell real
# service accounts apart from built-in Windows identities, Microsoft's own
# scheduled tasks and configured vendor task exclusions.

from typing import Iterable, List, Sequence

from .models.account import AccountRecord

# Built-in identities, compared case-insensitively
BUILTIN_IDENTITIES = frozenset({
    "system",
    "localsystem",
    "local system",
    "network service",
    "networkservice",
    "local service",
    "localservice",
})

# Prefix shared by NT AUTHORITY\*, NT SERVICE\* and NT VIRTUAL MACHINE\*
NT_PREFIX = "nt "

# Folder marker for tasks shipped with Windows
MICROSOFT_TASK_MARKER = "\\microsoft\\"

# Vendor tasks that run as the logged-on user rather than a service account
DEFAULT_TASK_EXCLUSIONS = (
    "User_Feed_Synchronization",
    "OneDrive Standalone Update Task",
    "OneDrive Reporting Task",
    "CreateExplorerShellUnelevatedTask",
)


def is_system_identity(name: str) -> bool:
    """True for empty identities and built-in Windows accounts."""
    if name is None:
        return True
    candidate = name.strip().lower()
    if not candidate:
        return True
    if candidate.startswith(NT_PREFIX):
        return True
    # Local-machine form of the same names, e.g. .\LocalSystem
    if candidate.startswith(".\\"):
        candidate = candidate[2:]
    return candidate in BUILTIN_IDENTITIES


def is_microsoft_task_path(path: str) -> bool:
    """True when the task lives under a \\Microsoft\\ folder."""
    return MICROSOFT_TASK_MARKER in (path or "").lower()


def is_excluded_task_name(name: str, exclusions: Iterable[str]) -> bool:
    """Case-sensitive substring match against every exclusion term."""
    return any(term and term in name for term in exclusions)


def apply_exclusions(records: Sequence[AccountRecord], exclusions: Iterable[str]) -> List[AccountRecord]:
    """
    Drop records whose name contains any exclusion term.

    Terms are removed one at a time, each pass filtering what the previous
    pass kept, so a single matching term is enough to drop a row.
    """
    kept = list(records)
    for term in exclusions:
        if not term:
            continue
        kept = [r for r in kept if term not in r.name]
    return kept
