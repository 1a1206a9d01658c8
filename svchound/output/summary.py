from typing import Any, Sequence

from ..models.result import FailureKind
from ..utils.console import print_summary_table as rich_summary_table


def _failure_reason(host_status: Any) -> str:
    """Human-readable reason for a skipped or failed host."""
    if FailureKind.HOST_UNREACHABLE in host_status.failures:
        return "Unreachable"
    if host_status.reason:
        return host_status.reason
    return "Unknown error"


def build_host_stats(statuses: Sequence[Any]) -> dict:
    """Turn HostStatus objects into the dict shape the rich table renders."""
    host_stats = {}
    for st in statuses:
        entry = host_stats.setdefault(
            st.host,
            {"services": 0, "tasks": 0, "warnings": 0, "strategy": "", "status": "[+]", "reason": ""},
        )
        if not st.reachable or st.reason:
            entry["status"] = "[-]"
            entry["reason"] = _failure_reason(st)
            continue
        entry["services"] += st.service_count
        entry["tasks"] += st.task_count
        entry["warnings"] += len(st.warnings)
        entry["strategy"] = st.strategy or ""
    return host_stats


def print_summary_table(statuses: Sequence[Any]):
    """Print a formatted summary table showing account counts per host."""
    if not statuses:
        return
    rich_summary_table(build_host_stats(statuses))
