# Local process execution and CSV parsing shared by the command-based
# transports (powershell.exe, schtasks.exe).

import csv
import subprocess
from io import StringIO
from typing import Dict, List, Sequence

from ..exceptions import QueryError
from ..utils.logging import debug

DEFAULT_TIMEOUT = 120


def run_command(argv: Sequence[str], interface: str, timeout: int = DEFAULT_TIMEOUT) -> str:
    """
    Run `argv` and return its stdout.

    Raises:
        QueryError: if the executable is missing, times out or exits non-zero
    """
    debug(f"exec: {argv[0]} ({interface})")
    try:
        proc = subprocess.run(  # noqa: S603 - argv is built internally, never shell-interpreted
            list(argv),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise QueryError(interface, f"{argv[0]} not found") from e
    except subprocess.TimeoutExpired as e:
        raise QueryError(interface, f"{argv[0]} timed out after {timeout}s") from e
    except OSError as e:
        raise QueryError(interface, str(e)) from e

    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip().splitlines()
        message = detail[0] if detail else f"exit code {proc.returncode}"
        raise QueryError(interface, message)
    return proc.stdout


def parse_csv_output(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text (ConvertTo-Csv or schtasks /fo csv) into dict rows.

    Blank lines and PowerShell "#TYPE" preambles are ignored.
    """
    lines = [ln for ln in text.splitlines() if ln.strip() and not ln.startswith("#TYPE")]
    if not lines:
        return []
    reader = csv.DictReader(StringIO("\n".join(lines)))
    return [{k: (v or "") for k, v in row.items() if k is not None} for row in reader]
