# Account data model for structured record representation.
#
# HostTarget identifies one host to inspect, the Raw*Entry classes hold the
# source-native shape a query returned, and AccountRecord is the unified
# row that ends up in the CSV export.

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from ..utils.helpers import is_local_host

# TaskPath value stamped on every service row
SERVICE_TASK_PATH = "N\\A"

# Export columns, in order
CSV_COLUMNS = ["ComputerName", "Name", "StartName", "StartMode", "State", "TaskPath", "Type"]


class AccountKind(str, Enum):
    """Which source produced an account record."""

    SERVICE = "Service"
    TASK = "Task"


@dataclass(frozen=True)
class HostTarget:
    """One host to inspect."""

    name: str
    is_local: bool = False

    @classmethod
    def from_name(cls, name: str) -> "HostTarget":
        return cls(name=name, is_local=is_local_host(name))


@dataclass(frozen=True)
class RawServiceEntry:
    """A service as returned by Win32_Service (CIM or WMI)."""

    name: str
    start_name: str
    start_mode: str
    state: str


@dataclass(frozen=True)
class RawTaskEntry:
    """
    A scheduled task as returned by Get-ScheduledTask or schtasks.exe.

    Attributes:
        path: Full task path including the leaf name (e.g. "\\Reports\\NightlyReport")
        name: Leaf task name
        run_as: Principal the task runs as
        scheduled_state: Enabled / Disabled
        status: Ready, Running, Disabled, Queued, ...
    """

    path: str
    name: str
    run_as: str
    scheduled_state: str
    status: str


@dataclass(frozen=True)
class AccountRecord:
    """
    Unified row describing one service or task and the account it runs as.

    Attributes:
        host_name: Host that was scanned (stamped by the source, not the raw entry)
        name: Service name or task leaf name
        start_name: Run-as identity
        start_mode: Service start type, or scheduled-task state for tasks
        state: Current run state
        task_path: Full path for tasks, "N\\A" for services
        kind: Service or Task
    """

    host_name: str
    name: str
    start_name: str
    start_mode: str
    state: str
    task_path: str
    kind: AccountKind

    def to_row(self) -> Dict[str, str]:
        """Convert to a dict keyed by the export column names."""
        return {
            "ComputerName": self.host_name,
            "Name": self.name,
            "StartName": self.start_name,
            "StartMode": self.start_mode,
            "State": self.state,
            "TaskPath": self.task_path,
            "Type": self.kind.value,
        }
