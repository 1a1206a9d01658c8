# Per-host processing for live targets.
#
# The orchestrator walks the host list strictly in order. For each host it
# checks reachability, probes the OS capability, resolves one connection
# strategy, then runs the service source followed by the task source and
# appends both batches to the aggregator. Failures stay inside the host
# they happened on and are reported through HostStatus.

from typing import Callable, Iterable, List, Optional, Tuple

from ..auth import AuthContext
from ..exceptions import SOURCE_ERRORS
from ..models.account import HostTarget
from ..models.result import FailureKind, HostStatus
from ..models.strategy import Capability, resolve_strategy
from ..probe import classify_os_version, local_os_version, remote_os_version
from ..sources.services import ServiceSource
from ..sources.tasks import TaskSource
from ..utils.logging import debug, good, info, status, warn
from ..utils.network import is_reachable
from .aggregator import Aggregator

Reachability = Callable[[str], bool]
VersionLookup = Callable[[HostTarget, AuthContext], Optional[Tuple[int, int]]]


def default_os_version(target: HostTarget, auth: AuthContext) -> Optional[Tuple[int, int]]:
    """Local platform version for the control host, remote probe otherwise."""
    if target.is_local:
        return local_os_version()
    return remote_os_version(target.name, auth)


class HostOrchestrator:
    """
    Drive probe -> strategy -> services -> tasks -> aggregate for each host.

    Args:
        service_source: ServiceSource (or compatible) instance
        task_source: TaskSource (or compatible) instance
        aggregator: Aggregator receiving every accepted record
        auth: Credentials for remote hosts
        reachability: Callable(host) -> bool, the external reachability probe
        os_version_lookup: Callable(target, auth) -> (major, minor) or None
    """

    def __init__(
        self,
        service_source: ServiceSource,
        task_source: TaskSource,
        aggregator: Aggregator,
        *,
        auth: Optional[AuthContext] = None,
        reachability: Optional[Reachability] = None,
        os_version_lookup: Optional[VersionLookup] = None,
    ):
        self.service_source = service_source
        self.task_source = task_source
        self.aggregator = aggregator
        self.auth = auth or AuthContext()
        self.reachability = reachability or (lambda host: is_reachable(host, timeout=self.auth.timeout))
        self.os_version_lookup = os_version_lookup or default_os_version

    def probe_capability(self, target: HostTarget) -> Capability:
        version = self.os_version_lookup(target, self.auth)
        capability = classify_os_version(version)
        if version is None:
            warn(f"{target.name}: OS version unknown, treating host as legacy", verbose_only=True)
        else:
            debug(f"{target.name}: OS version {version[0]}.{version[1]} -> {capability.value}")
        return capability

    def process_host(self, target: HostTarget) -> HostStatus:
        """Process one host and return its status. Never raises for host-level failures."""
        host_status = HostStatus(host=target.name)
        status(f"[Collecting] {target.name} ...")

        if not target.is_local and not self.reachability(target.name):
            host_status.failures.append(FailureKind.HOST_UNREACHABLE)
            host_status.reason = "Host unreachable"
            warn(SOURCE_ERRORS["unreachable"].format(host=target.name), verbose_only=True)
            status(f"[Collecting] {target.name} [-] (unreachable)")
            return host_status

        host_status.reachable = True
        capability = self.probe_capability(target)
        strategy = resolve_strategy(target, capability, self.auth)
        host_status.capability = capability.value
        host_status.strategy = strategy.label
        info(f"{target.name}: capability {capability.value}, strategy {strategy.label}")

        services = self.service_source.enumerate(target, strategy)
        tasks = self.task_source.enumerate(target, strategy)

        # One batch per host keeps services ahead of tasks
        self.aggregator.append([*services.records, *tasks.records])

        host_status.service_count = len(services.records)
        host_status.task_count = len(tasks.records)
        for outcome in (services, tasks):
            host_status.warnings.extend(outcome.warnings)
            if outcome.failure is not None:
                host_status.failures.append(outcome.failure)

        if services.ok and tasks.ok:
            status(f"[Collecting] {target.name} [+]")
        elif services.ok or tasks.ok:
            failed = tasks.source if services.ok else services.source
            status(f"[Collecting] {target.name} [!] ({failed} enumeration failed)")
        else:
            host_status.reason = "All queries failed"
            status(f"[Collecting] {target.name} [-] (all queries failed)")

        status(
            f"[AccountCount] {host_status.service_count} Service accounts, "
            f"{host_status.task_count} Task accounts"
        )
        good(f"{target.name}: done via {', '.join(services.attempts + tasks.attempts)}")
        return host_status

    def run(self, targets: Iterable[HostTarget]) -> List[HostStatus]:
        """
        Process every target in order, one host fully before the next.

        A Ctrl+C stops the loop between hosts; records collected so far stay
        in the aggregator.
        """
        statuses: List[HostStatus] = []
        for target in targets:
            try:
                statuses.append(self.process_host(target))
            except KeyboardInterrupt:
                warn("Interrupted - stopping host loop, keeping results collected so far")
                break
            except Exception as e:  # noqa: BLE001 - one host must never abort the run
                debug(f"{target.name}: unexpected error", exc_info=True)
                warn(f"{target.name}: processing failed: {e}")
                status(f"[Collecting] {target.name} [-] ({e})")
                statuses.append(
                    HostStatus(
                        host=target.name,
                        reachable=True,
                        failures=[FailureKind.SOURCE_FALLBACK_FAILED],
                        reason=str(e),
                    )
                )
        return statuses
