# PowerShell execution, locally through powershell.exe or remotely over
# WinRM (pywinrm). Both return the script's stdout as text; callers have
# their scripts end in ConvertTo-Csv and parse the result.

from typing import Optional

import winrm

from ..auth import AuthContext
from ..exceptions import QueryError
from ..utils.logging import debug
from .process import DEFAULT_TIMEOUT, run_command

POWERSHELL_EXE = "powershell.exe"

# Keep progress records out of stderr (they arrive as CLIXML over WinRM)
PREAMBLE = "$ProgressPreference = 'SilentlyContinue'; $ErrorActionPreference = 'Stop'; "

WINRM_HTTP_PORT = 5985


def run_local_powershell(script: str, interface: str, timeout: int = DEFAULT_TIMEOUT) -> str:
    """Run `script` with the local powershell.exe and return stdout."""
    argv = [
        POWERSHELL_EXE,
        "-NoProfile",
        "-NonInteractive",
        "-ExecutionPolicy",
        "Bypass",
        "-Command",
        PREAMBLE + script,
    ]
    return run_command(argv, interface, timeout=timeout)


def winrm_session(host: str, auth: AuthContext, port: int = WINRM_HTTP_PORT) -> winrm.Session:
    """Build a pywinrm session for `host` from the auth context."""
    transport = "kerberos" if auth.kerberos else "ntlm"
    # NTLM accepts "LM:NT" hashes in place of the password
    secret: Optional[str] = auth.password
    if not secret and auth.hashes:
        secret = auth.hashes if ":" in auth.hashes else f"{'0' * 32}:{auth.hashes}"
    return winrm.Session(
        f"http://{host}:{port}/wsman",
        auth=(auth.principal, secret or ""),
        transport=transport,
        operation_timeout_sec=max(auth.timeout - 5, 10),
        read_timeout_sec=max(auth.timeout, 15),
    )


def run_remote_powershell(host: str, auth: AuthContext, script: str, interface: str) -> str:
    """Run `script` on `host` over WinRM and return stdout."""
    debug(f"{host}: WinRM {interface}")
    try:
        result = winrm_session(host, auth).run_ps(PREAMBLE + script)
    except Exception as e:  # noqa: BLE001 - requests/ntlm/kerberos raise many unrelated types
        raise QueryError(interface, f"WinRM: {e}") from e

    if result.status_code != 0:
        stderr = result.std_err.decode("utf-8", errors="replace").strip()
        first = stderr.splitlines()[0] if stderr else f"exit code {result.status_code}"
        raise QueryError(interface, first)
    return result.std_out.decode("utf-8", errors="replace")
