# Typed results for query attempts, source outcomes and per-host status.
#
# Query attempts never raise to their caller: they return QueryOk or
# QueryFailed and the source decides the next attempt from that value.

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, Sequence, TypeVar, Union

from .account import AccountRecord

T = TypeVar("T")


class FailureKind(str, Enum):
    """Non-fatal failure categories recorded during a run."""

    HOST_UNREACHABLE = "HostUnreachable"
    SOURCE_QUERY_FAILED = "SourceQueryFailed"
    SOURCE_FALLBACK_FAILED = "SourceFallbackFailed"
    EXPORT_FAILED = "ExportFailed"


@dataclass(frozen=True)
class QueryOk(Generic[T]):
    """A query attempt that returned entries."""

    interface: str
    entries: Sequence[T]


@dataclass(frozen=True)
class QueryFailed:
    """A query attempt that failed; `error` is the transport's message."""

    interface: str
    error: str


QueryResult = Union[QueryOk, QueryFailed]


@dataclass
class SourceOutcome:
    """
    What one source produced for one host.

    Attributes:
        source: "Service" or "Task"
        records: Accepted, normalized records
        attempts: Interfaces tried, in order
        warnings: Fallback and failure messages for the status surface
        failure: Set when the source contributed nothing because every attempt failed
    """

    source: str
    records: List[AccountRecord] = field(default_factory=list)
    attempts: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    failure: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass
class HostStatus:
    """Per-host observability record rendered by the summary layer."""

    host: str
    reachable: bool = False
    strategy: Optional[str] = None
    capability: Optional[str] = None
    service_count: int = 0
    task_count: int = 0
    warnings: List[str] = field(default_factory=list)
    failures: List[FailureKind] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return not self.reachable

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "reachable": self.reachable,
            "strategy": self.strategy,
            "capability": self.capability,
            "service_count": self.service_count,
            "task_count": self.task_count,
            "warnings": list(self.warnings),
            "failures": [f.value for f in self.failures],
            "reason": self.reason,
        }
