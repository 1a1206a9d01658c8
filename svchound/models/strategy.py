# Connection strategy: how a host's management interface is reached.
#
# A strategy is resolved once per host from reachability and the OS
# capability probe, then handed unchanged to both the service and the task
# source. Each variant carries a fixed set of fields.

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..auth import AuthContext
from .account import HostTarget


class Capability(str, Enum):
    """Which generation of management interface a host supports."""

    MODERN = "Modern"
    LEGACY = "Legacy"


@dataclass(frozen=True)
class LocalStrategy:
    """Query the control host itself through local processes."""

    capability: Capability

    @property
    def label(self) -> str:
        return f"Local ({self.capability.value})"


@dataclass(frozen=True)
class ModernRemoteStrategy:
    """Remote host with CIM/WinRM and the ScheduledTasks module."""

    host: str
    auth: AuthContext = field(default_factory=AuthContext)

    @property
    def capability(self) -> Capability:
        return Capability.MODERN

    @property
    def label(self) -> str:
        return "ModernRemote"


@dataclass(frozen=True)
class LegacyRemoteStrategy:
    """Remote host that only offers WMI over DCOM and schtasks."""

    host: str
    auth: AuthContext = field(default_factory=AuthContext)

    @property
    def capability(self) -> Capability:
        return Capability.LEGACY

    @property
    def label(self) -> str:
        return "LegacyRemote"


ConnectionStrategy = Union[LocalStrategy, ModernRemoteStrategy, LegacyRemoteStrategy]


def resolve_strategy(target: HostTarget, capability: Capability, auth: AuthContext) -> ConnectionStrategy:
    """Pick the strategy variant for a reachable host."""
    if target.is_local:
        return LocalStrategy(capability=capability)
    if capability is Capability.MODERN:
        return ModernRemoteStrategy(host=target.name, auth=auth)
    return LegacyRemoteStrategy(host=target.name, auth=auth)
