# Result accumulation across hosts and sources.

from typing import Iterable, List

from ..models.account import AccountRecord


class Aggregator:
    """
    Ordered, append-only buffer of account records.

    Records keep their arrival order: hosts in host-list order and, within
    a host, services before tasks. Nothing is deduplicated or reordered.
    Only the orchestrator's single control thread appends.
    """

    def __init__(self):
        self._records: List[AccountRecord] = []

    def append(self, records: Iterable[AccountRecord]) -> None:
        self._records.extend(records)

    def all(self) -> List[AccountRecord]:
        """Return the accumulated result set (a copy)."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
