"""Account sources for SvcHound.

Modules:
    base: Query attempts and fallback chains
    services: Windows service enumeration
    tasks: Scheduled task enumeration
"""

from .services import ServiceSource
from .tasks import TaskSource

__all__ = ["ServiceSource", "TaskSource"]
