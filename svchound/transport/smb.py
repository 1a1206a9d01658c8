# SMB connection helpers.
#
# Thin wrapper around Impacket's SMBConnection. SvcHound only uses SMB to
# read the OS version a server advertises during NTLM session setup, which
# drives the modern/legacy capability decision for remote hosts.

import contextlib
from typing import Optional, Tuple

from impacket.smbconnection import SMBConnection

from ..auth import AuthContext
from ..utils.logging import debug


def smb_connect(target: str, auth: AuthContext) -> SMBConnection:
    # Create and authenticate an SMBConnection to `target`.
    #
    # Hashes win over a cleartext password. An AES key implies Kerberos.
    smb = SMBConnection(remoteName=target, remoteHost=target, sess_port=445, timeout=auth.timeout)

    lmhash, nthash = auth.get_lm_hash(), auth.get_nt_hash()
    password = "" if nthash else (auth.password or "")

    if auth.kerberos or auth.aes_key:
        smb.kerberosLogin(
            user=auth.username,
            password=password,
            domain=auth.domain,
            lmhash=lmhash,
            nthash=nthash,
            aesKey=auth.aes_key or "",
            TGT=None,
            TGS=None,
            kdcHost=auth.dc_ip,
        )
    elif nthash:
        smb.login(auth.username, "", auth.domain, lmhash=lmhash, nthash=nthash)
    else:
        # Anonymous/null session still yields the NTLM version block
        smb.login(auth.username or "", password, auth.domain or "")
    return smb


def smb_os_version(target: str, auth: AuthContext) -> Optional[Tuple[int, int]]:
    """
    Return the (major, minor) OS version advertised by `target` over SMB.

    Returns None when the server does not report a version (e.g. Kerberos
    sessions, which skip the NTLM challenge that carries it).
    """
    smb = smb_connect(target, auth)
    try:
        major = smb.getServerOSMajor()
        minor = smb.getServerOSMinor()
        debug(f"{target}: SMB reports OS {smb.getServerOS()!r} ({major}.{minor})")
    finally:
        with contextlib.suppress(Exception):
            smb.close()
    if not major:
        return None
    return int(major), int(minor or 0)
