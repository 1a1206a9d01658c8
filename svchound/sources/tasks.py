# Scheduled task enumeration.
#
# Modern hosts are queried with Get-ScheduledTask (locally or over WinRM).
# Legacy hosts, and modern hosts where that query fails, fall back to
# schtasks.exe. Microsoft's own tasks, built-in identities and configured
# vendor task names are filtered out before records leave this module.

from typing import Any, Dict, Iterable, List

from ..exceptions import QueryError
from ..filters import DEFAULT_TASK_EXCLUSIONS, apply_exclusions, is_microsoft_task_path, is_system_identity
from ..models.account import AccountKind, AccountRecord, HostTarget, RawTaskEntry
from ..models.result import QueryOk, SourceOutcome
from ..models.strategy import Capability, ConnectionStrategy, LegacyRemoteStrategy, LocalStrategy
from ..transport.powershell import run_local_powershell, run_remote_powershell
from ..transport.process import parse_csv_output
from ..transport.schtasks import query_schtasks
from ..utils.logging import debug
from .base import run_with_fallback

SCHEDULED_TASKS_INTERFACE = "ScheduledTasks"
SCHTASKS_INTERFACE = "schtasks"

TASK_SCRIPT = (
    "Get-ScheduledTask | Select-Object TaskName,TaskPath,"
    "@{Name='UserId';Expression={$_.Principal.UserId}},"
    "@{Name='Enabled';Expression={$_.Settings.Enabled}},"
    "State | ConvertTo-Csv -NoTypeInformation"
)


def _raw_task(row: Dict[str, Any]) -> RawTaskEntry:
    name = row.get("TaskName") or ""
    folder = row.get("TaskPath") or "\\"
    if not folder.endswith("\\"):
        folder += "\\"
    enabled = (row.get("Enabled") or "").strip().lower()
    return RawTaskEntry(
        path=folder + name,
        name=name,
        run_as=row.get("UserId") or "",
        scheduled_state="Disabled" if enabled == "false" else "Enabled",
        status=row.get("State") or "",
    )


def query_tasks_modern(strategy: ConnectionStrategy) -> List[RawTaskEntry]:
    """Modern interface: Get-ScheduledTask locally or over WinRM."""
    if isinstance(strategy, LocalStrategy):
        output = run_local_powershell(TASK_SCRIPT, SCHEDULED_TASKS_INTERFACE)
    elif isinstance(strategy, LegacyRemoteStrategy):
        raise QueryError(SCHEDULED_TASKS_INTERFACE, "ScheduledTasks module is not available on legacy hosts")
    else:
        output = run_remote_powershell(strategy.host, strategy.auth, TASK_SCRIPT, SCHEDULED_TASKS_INTERFACE)
    return [_raw_task(row) for row in parse_csv_output(output) if row.get("TaskName")]


def query_tasks_legacy(strategy: ConnectionStrategy) -> List[RawTaskEntry]:
    """Legacy interface: schtasks.exe, with /s for remote hosts."""
    if isinstance(strategy, LocalStrategy):
        return query_schtasks(interface=SCHTASKS_INTERFACE)
    return query_schtasks(strategy.host, strategy.auth, interface=SCHTASKS_INTERFACE)


def task_record(host_name: str, raw: RawTaskEntry) -> AccountRecord:
    """Project a raw task entry into the unified record shape."""
    return AccountRecord(
        host_name=host_name,
        name=raw.name,
        start_name=raw.run_as,
        start_mode=raw.scheduled_state,
        state=raw.status,
        task_path=raw.path,
        kind=AccountKind.TASK,
    )


class TaskSource:
    """Enumerate scheduled tasks and their run-as accounts on one host."""

    source = "Task"

    def __init__(self, exclusions: Iterable[str] = DEFAULT_TASK_EXCLUSIONS):
        self.exclusions = tuple(exclusions)

    def enumerate(self, host: HostTarget, strategy: ConnectionStrategy) -> SourceOutcome:
        outcome = SourceOutcome(source=self.source)

        if strategy.capability is Capability.MODERN:
            chain = [(SCHEDULED_TASKS_INTERFACE, query_tasks_modern), (SCHTASKS_INTERFACE, query_tasks_legacy)]
        else:
            chain = [(SCHTASKS_INTERFACE, query_tasks_legacy)]

        result = run_with_fallback(outcome, host, strategy, chain)
        if not isinstance(result, QueryOk):
            return outcome

        candidates = [
            task_record(host.name, raw)
            for raw in result.entries
            if not is_microsoft_task_path(raw.path) and not is_system_identity(raw.run_as)
        ]
        outcome.records = apply_exclusions(candidates, self.exclusions)

        debug(
            f"{host.name}: {len(result.entries)} tasks, {len(candidates)} non-system, "
            f"{len(outcome.records)} after exclusions"
        )
        return outcome
