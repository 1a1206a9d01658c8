"""
Pytest configuration and shared fixtures for SvcHound tests.
"""

import pytest

from svchound.auth import AuthContext
from svchound.models.account import HostTarget, RawServiceEntry, RawTaskEntry
from svchound.models.strategy import (
    Capability,
    LegacyRemoteStrategy,
    LocalStrategy,
    ModernRemoteStrategy,
)
from svchound.utils.logging import set_verbosity


@pytest.fixture(autouse=True)
def reset_verbosity(monkeypatch):
    """Every test starts in concise mode with debug env cleared."""
    # setenv first so teardown removes anything --debug exported
    monkeypatch.setenv("SVCHOUND_DEBUG", "")
    monkeypatch.delenv("SVCHOUND_DEBUG")
    set_verbosity(False, False)
    yield
    set_verbosity(False, False)


@pytest.fixture
def auth():
    return AuthContext(username="admin", password="Passw0rd!", domain="CORP")


@pytest.fixture
def web01():
    return HostTarget(name="WEB01", is_local=False)


@pytest.fixture
def local_host():
    return HostTarget(name="MYPC", is_local=True)


@pytest.fixture
def modern_remote(auth):
    return ModernRemoteStrategy(host="WEB01", auth=auth)


@pytest.fixture
def legacy_remote(auth):
    return LegacyRemoteStrategy(host="OLD01", auth=auth)


@pytest.fixture
def local_modern():
    return LocalStrategy(capability=Capability.MODERN)


@pytest.fixture
def sample_services():
    """Mix of built-in and real service accounts as Win32_Service reports them."""
    return [
        RawServiceEntry("SvcBackup", "DOMAIN\\svc_backup", "Auto", "Running"),
        RawServiceEntry("Spooler", "LocalSystem", "Auto", "Running"),
        RawServiceEntry("Dhcp", "NT Authority\\LocalService", "Auto", "Running"),
        RawServiceEntry("WinDefend", "NT AUTHORITY\\SYSTEM", "Auto", "Running"),
        RawServiceEntry("MSSQL$APP", "NT Service\\MSSQL$APP", "Auto", "Running"),
        RawServiceEntry("KernelDriverish", "", "Manual", "Stopped"),
        RawServiceEntry("AppPoolSvc", ".\\appsvc", "Manual", "Stopped"),
    ]


@pytest.fixture
def sample_tasks():
    """Scheduled tasks including Microsoft and built-in principals."""
    return [
        RawTaskEntry("\\Microsoft\\Windows\\Defrag\\ScheduledDefrag", "ScheduledDefrag", "SYSTEM", "Enabled", "Ready"),
        RawTaskEntry("\\Microsoft\\Office\\OfficeTelemetry", "OfficeTelemetry", "DOMAIN\\svc_office", "Enabled", "Ready"),
        RawTaskEntry("\\Reports\\NightlyReport", "NightlyReport", "DOMAIN\\svc_report", "Enabled", "Ready"),
        RawTaskEntry("\\Cleanup", "Cleanup", "NETWORK SERVICE", "Enabled", "Ready"),
        RawTaskEntry("\\NoPrincipal", "NoPrincipal", "", "Disabled", "Disabled"),
        RawTaskEntry(
            "\\User_Feed_Synchronization-{1234}", "User_Feed_Synchronization-{1234}", "CORP\\jdoe", "Enabled", "Ready"
        ),
    ]
