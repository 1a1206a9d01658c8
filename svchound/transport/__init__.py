"""Management-interface transports for SvcHound.

Modules:
    powershell: Local powershell.exe and remote WinRM execution
    process: Local process execution and CSV parsing
    schtasks: Legacy schtasks.exe task listing
    smb: SMB session setup (OS version probe)
    wmi: WMI over DCOM (legacy remote queries)
"""
