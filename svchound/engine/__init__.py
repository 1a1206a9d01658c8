# Engine package for account discovery.
#
# This package provides the host loop (HostOrchestrator) and the result
# buffer it fills (Aggregator).

from .aggregator import Aggregator
from .orchestrator import HostOrchestrator, default_os_version

__all__ = [
    "Aggregator",
    "HostOrchestrator",
    "default_os_version",
]
