from .account import (
    CSV_COLUMNS,
    SERVICE_TASK_PATH,
    AccountKind,
    AccountRecord,
    HostTarget,
    RawServiceEntry,
    RawTaskEntry,
)
from .result import FailureKind, HostStatus, QueryFailed, QueryOk, SourceOutcome
from .strategy import (
    Capability,
    ConnectionStrategy,
    LegacyRemoteStrategy,
    LocalStrategy,
    ModernRemoteStrategy,
    resolve_strategy,
)

__all__ = [
    "CSV_COLUMNS",
    "SERVICE_TASK_PATH",
    "AccountKind",
    "AccountRecord",
    "HostTarget",
    "RawServiceEntry",
    "RawTaskEntry",
    "FailureKind",
    "HostStatus",
    "QueryFailed",
    "QueryOk",
    "SourceOutcome",
    "Capability",
    "ConnectionStrategy",
    "LegacyRemoteStrategy",
    "LocalStrategy",
    "ModernRemoteStrategy",
    "resolve_strategy",
]
