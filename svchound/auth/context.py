# Authentication context dataclass.
#
# Bundles the credentials used for remote management queries (WinRM, DCOM,
# SMB and schtasks /s) so they travel through the engine as one value.
#
# Usage:
#     auth = AuthContext(
#         username="admin",
#         password="secret",
#         domain="CORP",
#     )
#     orchestrator = HostOrchestrator(..., auth=auth)

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthContext:
    """
    Bundles all authentication-related parameters for SvcHound operations.

    An empty AuthContext means "use the current logon session": local queries
    and schtasks.exe run under the invoking user, while impacket and WinRM
    transports require explicit credentials (or a Kerberos ccache with -k).

    Attributes:
        username: Username for remote authentication
        password: Password (mutually exclusive with hashes for NTLM auth)
        domain: Domain name for authentication
        hashes: NTLM hashes in LMHASH:NTHASH format (alternative to password)
        aes_key: Kerberos AES key (128 or 256 bit)
        kerberos: Use Kerberos authentication instead of NTLM
        dc_ip: Domain controller / KDC address for Kerberos
        timeout: Connection timeout in seconds
    """

    username: str = ""
    password: Optional[str] = None
    domain: str = ""
    hashes: Optional[str] = None
    aes_key: Optional[str] = None
    kerberos: bool = False
    dc_ip: Optional[str] = None
    timeout: int = 30

    @property
    def principal(self) -> str:
        """DOMAIN\\user form used by WinRM and schtasks /u."""
        if self.domain and self.username:
            return f"{self.domain}\\{self.username}"
        return self.username

    def get_lm_hash(self) -> str:
        """Extract LM hash from hashes string."""
        if not self.hashes:
            return ""
        parts = self.hashes.split(":")
        return parts[0] if len(parts) >= 2 else ""

    def get_nt_hash(self) -> str:
        """Extract NT hash from hashes string."""
        if not self.hashes:
            return ""
        parts = self.hashes.split(":")
        return parts[1] if len(parts) >= 2 else parts[0]

    def __repr__(self) -> str:
        """Safe repr that doesn't expose credentials."""
        return (
            f"AuthContext(username={self.username!r}, domain={self.domain!r}, "
            f"kerberos={self.kerberos}, dc_ip={self.dc_ip!r}, "
            f"has_password={self.password is not None}, "
            f"has_hashes={self.hashes is not None}, "
            f"has_aes_key={self.aes_key is not None})"
        )
