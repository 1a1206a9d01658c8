# Rich-based console for colored terminal output.
#
# This module provides a centralized console for all SvcHound output.
# Every status helper funnels through the same Console instance so the
# optional transcript (--log-file) captures everything printed during a run.
# All output comes from the single control thread.

import os
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Global console instance. record=True keeps a copy of everything printed so
# the transcript can be saved at the end of the run.
console = Console(highlight=False, record=True)

# Environment switch that turns on debug output without --debug
DEBUG_ENV = "SVCHOUND_DEBUG"


# =============================================================================
# Banner
# =============================================================================

SVCHOUND_TEAL = "#14B8A6"

BANNER_ART = f"""
[bold {SVCHOUND_TEAL}] SSS  V   V  CCC  H   H  OOO  U   U N   N DDDD[/]
[bold {SVCHOUND_TEAL}]S     V   V C     H   H O   O U   U NN  N D   D[/]
[bold {SVCHOUND_TEAL}] SSS  V   V C     HHHHH O   O U   U N N N D   D[/]
[bold {SVCHOUND_TEAL}]    S  V V  C     H   H O   O U   U N  NN D   D[/]
[bold {SVCHOUND_TEAL}]SSSS    V    CCC  H   H  OOO   UUU  N   N DDDD[/]

          [dim]service account discovery for credential rotation[/]
"""


def print_banner():
    """Print the colored SvcHound banner."""
    console.print(BANNER_ART)


# =============================================================================
# Status Messages
# =============================================================================

def status(msg: str):
    """Print a status message (always visible)."""
    console.print(msg)


def good(msg: str):
    """Print a success message in green (verbose mode only)."""
    if _is_verbose():
        console.print(f"[green][+][/] {msg}")


def warn(msg: str, verbose_only: bool = False):
    """Print a warning message in yellow.

    Args:
        msg: Message to print
        verbose_only: If True, only print in verbose mode (fallback notices)
    """
    if verbose_only and not _is_verbose():
        return
    console.print(f"[yellow][!][/] {msg}")


def error(msg: str):
    """Print an error message in red."""
    console.print(f"[red][-][/] {msg}")


def info(msg: str):
    """Print an info message in blue (verbose mode only)."""
    if _is_verbose():
        console.print(f"[blue][*][/] {msg}")


def debug(msg: str, exc_info: bool = False):
    """Print a debug message in dim text."""
    if not _is_debug():
        return
    console.print(f"[dim][DEBUG][/] {msg}")
    if exc_info:
        console.print_exception()


# =============================================================================
# Verbosity Control
# =============================================================================

_VERBOSE = False
_DEBUG = False


def set_verbosity(verbose: bool, debug: bool):
    """Set verbosity levels. Debug mode is also exported through SVCHOUND_DEBUG."""
    global _VERBOSE, _DEBUG
    _VERBOSE = verbose
    _DEBUG = debug
    if debug:
        os.environ[DEBUG_ENV] = "1"


def _is_verbose() -> bool:
    return _VERBOSE or _is_debug()


def _is_debug() -> bool:
    return _DEBUG or bool(os.getenv(DEBUG_ENV))


# =============================================================================
# Transcript
# =============================================================================

def save_transcript(path: str) -> None:
    """Write everything printed so far to `path` as plain text."""
    console.save_text(path, clear=False, styles=False)


# =============================================================================
# Summary Table
# =============================================================================

def print_summary_table(host_stats: dict):
    """
    Print a rich summary table with per-host account counts.

    Shows scanned hosts first with service/task account counts, then skipped
    or failed hosts in a separate table.

    Args:
        host_stats: Dict of {hostname: {services, tasks, status, reason, warnings}}
    """
    if not host_stats:
        return

    ok_hosts = {}
    failed_hosts = {}
    for host, stats in host_stats.items():
        if stats["status"] == "[+]":
            ok_hosts[host] = stats
        else:
            failed_hosts[host] = stats

    total_services = 0
    total_tasks = 0

    if ok_hosts:
        table = Table(
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
            box=None,
        )

        table.add_column("Hostname", style="white", no_wrap=True)
        table.add_column("Strategy", style="dim")
        table.add_column("Services", justify="center", style="green")
        table.add_column("Tasks", justify="center", style="green")
        table.add_column("Warnings", justify="center", style="yellow")

        # Host list order, same as the CSV
        for host, stats in ok_hosts.items():
            total_services += stats["services"]
            total_tasks += stats["tasks"]
            table.add_row(
                host,
                stats.get("strategy", ""),
                str(stats["services"]),
                str(stats["tasks"]),
                str(stats.get("warnings", 0)) if stats.get("warnings") else "-",
            )

        if len(ok_hosts) > 1:
            table.add_section()
            table.add_row(
                "[bold]TOTAL[/]",
                "",
                f"[bold]{total_services}[/]",
                f"[bold]{total_tasks}[/]",
                "",
            )

        console.print()
        console.print(
            Panel(
                table,
                title="[bold]ACCOUNT SUMMARY[/]",
                border_style="cyan",
            )
        )

    if failed_hosts:
        fail_table = Table(
            show_header=True,
            header_style="bold red",
            border_style="dim red",
            box=None,
        )

        fail_table.add_column("Hostname", style="white", no_wrap=True)
        fail_table.add_column("Reason", style="dim")

        for host, stats in failed_hosts.items():
            reason = stats.get("reason") or "Unknown error"
            if len(reason) > 60:
                reason = reason[:57] + "..."
            fail_table.add_row(host, reason)

        console.print()
        console.print(
            Panel(
                fail_table,
                title=f"[bold red]SKIPPED HOSTS ({len(failed_hosts)})[/]",
                border_style="red",
            )
        )

    console.print()


def print_export_section(csv_path: Optional[str], row_count: int = 0):
    """Print export result in a styled panel."""
    console.print()
    if csv_path:
        content = f"[green][+][/] {row_count} account rows written to: [bold]{csv_path}[/]"
        border_style = "green"
    else:
        content = "[yellow][!][/] Results were not written to disk"
        border_style = "yellow"
    console.print(
        Panel(
            content,
            title="[bold]CSV EXPORT[/]",
            border_style=border_style,
        )
    )
