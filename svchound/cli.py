import time
from datetime import datetime
from typing import Any, List, Optional, Sequence

from .auth import AuthContext
from .config import build_parser, validate_args
from .engine import Aggregator, HostOrchestrator
from .exceptions import ExportError
from .filters import DEFAULT_TASK_EXCLUSIONS
from .models.account import HostTarget
from .output.summary import print_summary_table
from .output.writer import write_csv, write_status_json
from .sources import ServiceSource, TaskSource
from .utils.console import print_banner, print_export_section, save_transcript
from .utils.helpers import local_hostname, normalize_targets
from .utils.logging import debug, error, info, set_verbosity, status, warn


def default_output_path(now: Optional[datetime] = None) -> str:
    """ServiceAccounts_<yyyyMMdd_HHmmss>.csv in the working directory."""
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"ServiceAccounts_{stamp}.csv"


def collect_targets(args: Any) -> List[str]:
    """Hosts from -t and --targets-file, in the order given; the local host if none."""
    targets = []
    if args.target:
        targets.extend(args.target.split(","))
    if args.targets_file:
        with open(args.targets_file, encoding="utf-8") as f:
            targets.extend(f.read().splitlines())
    targets = normalize_targets(targets)
    return targets or [local_hostname()]


def build_exclusions(args: Any) -> Sequence[str]:
    """Built-in vendor exclusions plus config-file and command-line terms."""
    terms: List[str] = []
    if not args.no_default_exclusions:
        terms.extend(DEFAULT_TASK_EXCLUSIONS)
    for term in list(args.config_exclusions) + list(args.exclude_task):
        if term and term not in terms:
            terms.append(term)
    return tuple(terms)


def build_auth(args: Any) -> AuthContext:
    # AES key implies Kerberos authentication
    return AuthContext(
        username=args.username or "",
        password=args.password,
        domain=args.domain or "",
        hashes=args.hashes,
        aes_key=args.aes_key,
        kerberos=bool(args.kerberos or args.aes_key),
        dc_ip=args.dc_ip,
        timeout=args.timeout,
    )


def _export(args: Any, records: List[Any], statuses: List[Any]) -> int:
    """Write the CSV (and optional status JSON). Returns the process exit code."""
    exit_code = 0
    output = args.output or default_output_path()
    try:
        count = write_csv(output, records)
        print_export_section(output, count)
    except ExportError as e:
        # Results stay in memory; only the file is missing
        warn(f"Export failed: {e}")
        print_export_section(None)
        exit_code = 1

    if args.status_json:
        try:
            write_status_json(args.status_json, statuses)
        except ExportError as e:
            warn(f"Status export failed: {e}")
            exit_code = 1
    return exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    print_banner()
    ap = build_parser()
    args = ap.parse_args(argv)

    # Set verbosity early
    set_verbosity(args.verbose, args.debug)

    validate_args(args)

    targets = collect_targets(args)
    exclusions = build_exclusions(args)
    auth = build_auth(args)
    debug(f"Auth: {auth!r}")
    info(f"{len(targets)} host(s) to inspect, {len(exclusions)} task exclusion term(s)")

    aggregator = Aggregator()
    orchestrator = HostOrchestrator(
        ServiceSource(),
        TaskSource(exclusions),
        aggregator,
        auth=auth,
    )

    start_time = time.perf_counter()
    statuses = orchestrator.run([HostTarget.from_name(t) for t in targets])
    elapsed = time.perf_counter() - start_time

    records = aggregator.all()
    print_summary_table(statuses)
    skipped = sum(1 for s in statuses if s.skipped)
    status(f"[Done] {len(records)} account rows from {len(statuses) - skipped} host(s), "
           f"{skipped} skipped, {elapsed:.1f}s")

    exit_code = _export(args, records, statuses)

    if args.log_file:
        try:
            save_transcript(args.log_file)
        except OSError as e:
            error(f"Failed to write transcript {args.log_file}: {e}")
            exit_code = 1
    return exit_code
