# WMI over DCOM using Impacket.
#
# This is the legacy remote management interface: it works against hosts
# that predate WinRM/CIM (Windows 7 / 2008 R2 and older) as long as RPC
# (135 + dynamic ports) is reachable and the account is a local admin.

import contextlib
from typing import Any, Dict, List

from impacket.dcerpc.v5.dcom import wmi
from impacket.dcerpc.v5.dcomrt import DCOMConnection
from impacket.dcerpc.v5.dtypes import NULL

from ..auth import AuthContext
from ..exceptions import QueryError
from ..utils.logging import debug

CIMV2_NAMESPACE = "//./root/cimv2"


def _enumerate(enum) -> List[Dict[str, Any]]:
    # Drain an IEnumWbemClassObject into plain dicts.
    #
    # Next() signals the end of the result set with an S_FALSE error.
    rows: List[Dict[str, Any]] = []
    while True:
        try:
            obj = enum.Next(0xFFFFFFFF, 1)[0]
        except Exception as e:  # noqa: BLE001 - impacket raises DCERPCException for S_FALSE
            if "S_FALSE" in str(e):
                break
            raise
        props = obj.getProperties()
        rows.append({name: prop.get("value") for name, prop in props.items()})
    return rows


def wmi_query(target: str, auth: AuthContext, wql: str, interface: str = "WMI/DCOM") -> List[Dict[str, Any]]:
    """
    Run a WQL query against `target` and return one dict per instance.

    Raises:
        QueryError: on any DCOM, authentication or WMI failure
    """
    debug(f"{target}: {interface} query: {wql}")
    dcom = None
    try:
        dcom = DCOMConnection(
            target,
            auth.username,
            auth.password or "",
            auth.domain,
            auth.get_lm_hash(),
            auth.get_nt_hash(),
            auth.aes_key or "",
            oxidResolver=True,
            doKerberos=auth.kerberos or bool(auth.aes_key),
            kdcHost=auth.dc_ip,
        )
        iface = dcom.CoCreateInstanceEx(wmi.CLSID_WbemLevel1Login, wmi.IID_IWbemLevel1Login)
        login = wmi.IWbemLevel1Login(iface)
        services = login.NTLMLogin(CIMV2_NAMESPACE, NULL, NULL)
        login.RemRelease()

        enum = services.ExecQuery(wql)
        try:
            return _enumerate(enum)
        finally:
            enum.RemRelease()
            services.RemRelease()
    except QueryError:
        raise
    except Exception as e:  # noqa: BLE001 - DCOM has many failure modes (RPC, auth, WMI)
        raise QueryError(interface, str(e)) from e
    finally:
        if dcom is not None:
            with contextlib.suppress(Exception):
                dcom.disconnect()
