import csv
import json
from typing import Any, Dict, List, Sequence

from ..exceptions import ExportError
from ..models.account import CSV_COLUMNS
from ..utils.logging import good


def _rows_to_dicts(rows: Sequence[Any]) -> List[Dict]:
    """Convert AccountRecord objects to export dicts."""
    return [row.to_row() if hasattr(row, "to_row") else row for row in rows]


def write_csv(path: str, rows: Sequence[Any]) -> int:
    """
    Write account rows to `path` with the fixed column order.

    Returns:
        Number of rows written

    Raises:
        ExportError: if the file cannot be written
    """
    dicts = _rows_to_dicts(rows)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            w = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
            w.writeheader()
            w.writerows(dicts)
    except (OSError, ValueError) as e:
        raise ExportError(f"Failed to write {path}: {e}") from e
    good(f"Wrote CSV results to {path}")
    return len(dicts)


def write_status_json(path: str, statuses: Sequence[Any]) -> None:
    """Write per-host status records (reachability, counts, warnings) as JSON."""
    data = [s.to_dict() if hasattr(s, "to_dict") else s for s in statuses]
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e
    good(f"Wrote host status to {path}")
