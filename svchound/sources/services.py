# Service enumeration.
#
# Reads Win32_Service (Name, StartName, StartMode, State) through CIM on
# modern hosts and through WMI on legacy hosts or when CIM fails, then
# keeps only services that run as a non-built-in account.

from typing import Any, Dict, List

from ..exceptions import QueryError
from ..filters import is_system_identity
from ..models.account import SERVICE_TASK_PATH, AccountKind, AccountRecord, HostTarget, RawServiceEntry
from ..models.result import QueryOk, SourceOutcome
from ..models.strategy import Capability, ConnectionStrategy, LegacyRemoteStrategy, LocalStrategy
from ..transport.powershell import run_local_powershell, run_remote_powershell
from ..transport.process import parse_csv_output
from ..transport.wmi import wmi_query
from ..utils.logging import debug
from .base import run_with_fallback

CIM_INTERFACE = "CIM"
WMI_INTERFACE = "WMI"

SERVICE_PROPERTIES = "Name,StartName,StartMode,State"

CIM_SCRIPT = (
    f"Get-CimInstance -ClassName Win32_Service | Select-Object {SERVICE_PROPERTIES} "
    "| ConvertTo-Csv -NoTypeInformation"
)
WMI_SCRIPT = (
    f"Get-WmiObject -Class Win32_Service | Select-Object {SERVICE_PROPERTIES} "
    "| ConvertTo-Csv -NoTypeInformation"
)
WMI_QUERY = f"SELECT {SERVICE_PROPERTIES} FROM Win32_Service"


def _raw_service(row: Dict[str, Any]) -> RawServiceEntry:
    return RawServiceEntry(
        name=str(row.get("Name") or ""),
        start_name=str(row.get("StartName") or ""),
        start_mode=str(row.get("StartMode") or ""),
        state=str(row.get("State") or ""),
    )


def query_services_cim(strategy: ConnectionStrategy) -> List[RawServiceEntry]:
    """Modern interface: Get-CimInstance locally or over WinRM."""
    if isinstance(strategy, LocalStrategy):
        output = run_local_powershell(CIM_SCRIPT, CIM_INTERFACE)
    elif isinstance(strategy, LegacyRemoteStrategy):
        raise QueryError(CIM_INTERFACE, "CIM is not available on legacy hosts")
    else:
        output = run_remote_powershell(strategy.host, strategy.auth, CIM_SCRIPT, CIM_INTERFACE)
    return [_raw_service(row) for row in parse_csv_output(output)]


def query_services_wmi(strategy: ConnectionStrategy) -> List[RawServiceEntry]:
    """Legacy interface: Get-WmiObject locally, WMI over DCOM remotely."""
    if isinstance(strategy, LocalStrategy):
        output = run_local_powershell(WMI_SCRIPT, WMI_INTERFACE)
        rows = parse_csv_output(output)
    else:
        rows = wmi_query(strategy.host, strategy.auth, WMI_QUERY, interface=WMI_INTERFACE)
    return [_raw_service(row) for row in rows]


def service_record(host_name: str, raw: RawServiceEntry) -> AccountRecord:
    """Project a raw service entry into the unified record shape."""
    return AccountRecord(
        host_name=host_name,
        name=raw.name,
        start_name=raw.start_name,
        start_mode=raw.start_mode,
        state=raw.state,
        task_path=SERVICE_TASK_PATH,
        kind=AccountKind.SERVICE,
    )


class ServiceSource:
    """Enumerate services and their run-as accounts on one host."""

    source = "Service"

    def enumerate(self, host: HostTarget, strategy: ConnectionStrategy) -> SourceOutcome:
        outcome = SourceOutcome(source=self.source)

        # CIM is only attempted where it is guaranteed to exist
        if strategy.capability is Capability.MODERN:
            chain = [(CIM_INTERFACE, query_services_cim), (WMI_INTERFACE, query_services_wmi)]
        else:
            chain = [(WMI_INTERFACE, query_services_wmi)]

        result = run_with_fallback(outcome, host, strategy, chain)
        if not isinstance(result, QueryOk):
            return outcome

        for raw in result.entries:
            if is_system_identity(raw.start_name):
                continue
            outcome.records.append(service_record(host.name, raw))

        debug(f"{host.name}: {len(outcome.records)} of {len(result.entries)} services run as service accounts")
        return outcome
