"""
Test suite for schtasks.exe command building and CSV parsing.
"""

from unittest.mock import patch

from svchound.auth import AuthContext
from svchound.transport.schtasks import (
    build_schtasks_command,
    parse_schtasks_csv,
    query_schtasks,
)

HEADER = (
    '"HostName","TaskName","Next Run Time","Status","Logon Mode","Last Run Time","Last Result",'
    '"Author","Task To Run","Start In","Comment","Scheduled Task State","Idle Time",'
    '"Power Management","Run As User","Delete Task If Not Rescheduled"'
)


def _row(task, status, state, run_as, host="WEB01"):
    return (
        f'"{host}","{task}","N/A","{status}","Interactive/Background","N/A","0",'
        f'"CORP\\admin","C:\\run.cmd","N/A","N/A","{state}","Disabled","Stop On Battery Mode","{run_as}","Disabled"'
    )


SAMPLE = "\r\n".join(
    [
        "",
        HEADER,
        _row("\\NightlyReport", "Ready", "Enabled", "DOMAIN\\svc_report"),
        _row("\\NightlyReport", "Ready", "Enabled", "DOMAIN\\svc_report"),  # second trigger
        "",
        HEADER,
        _row("\\Microsoft\\Windows\\Defrag\\ScheduledDefrag", "Ready", "Enabled", "SYSTEM"),
        _row("\\Vendor\\Sync", "Disabled", "Disabled", "CORP\\svc_sync"),
    ]
)


class TestBuildSchtasksCommand:
    """Tests for build_schtasks_command function"""

    def test_local(self):
        assert build_schtasks_command() == ["schtasks.exe", "/query", "/fo", "csv", "/v"]

    def test_remote_without_credentials(self):
        argv = build_schtasks_command("WEB01", AuthContext())
        assert argv == ["schtasks.exe", "/query", "/s", "WEB01", "/fo", "csv", "/v"]

    def test_remote_with_credentials(self):
        auth = AuthContext(username="admin", password="pw", domain="CORP")
        argv = build_schtasks_command("WEB01", auth)
        assert argv[argv.index("/u") + 1] == "CORP\\admin"
        assert argv[argv.index("/p") + 1] == "pw"

    def test_username_without_password_omits_both(self):
        """schtasks prompts for /p when /u is given alone"""
        argv = build_schtasks_command("WEB01", AuthContext(username="admin", hashes="aa:bb"))
        assert "/u" not in argv
        assert "/p" not in argv


class TestParseSchtasksCsv:
    """Tests for parse_schtasks_csv function"""

    def test_parses_rows(self):
        entries = parse_schtasks_csv(SAMPLE)

        first = entries[0]
        assert first.path == "\\NightlyReport"
        assert first.name == "NightlyReport"
        assert first.run_as == "DOMAIN\\svc_report"
        assert first.scheduled_state == "Enabled"
        assert first.status == "Ready"

    def test_skips_repeated_headers_and_trigger_duplicates(self):
        entries = parse_schtasks_csv(SAMPLE)
        assert [e.path for e in entries] == [
            "\\NightlyReport",
            "\\Microsoft\\Windows\\Defrag\\ScheduledDefrag",
            "\\Vendor\\Sync",
        ]

    def test_leaf_name_from_nested_path(self):
        entries = parse_schtasks_csv(SAMPLE)
        assert entries[2].name == "Sync"
        assert entries[2].status == "Disabled"

    def test_localized_headers_use_positions(self):
        german = HEADER.replace("TaskName", "Aufgabenname").replace("Run As User", "Als Benutzer ausfuehren")
        text = "\r\n".join([german, _row("\\Job", "Bereit", "Aktiviert", "CORP\\svc_job")])

        entries = parse_schtasks_csv(text)

        assert len(entries) == 1
        assert entries[0].run_as == "CORP\\svc_job"
        assert entries[0].name == "Job"

    def test_empty_output(self):
        assert parse_schtasks_csv("") == []
        assert parse_schtasks_csv("\r\n\r\n") == []

    def test_short_rows_ignored(self):
        text = "\r\n".join([HEADER, '"WEB01","\\Broken"'])
        assert parse_schtasks_csv(text) == []


class TestQuerySchtasks:
    """Tests for query_schtasks function"""

    @patch("svchound.transport.schtasks.run_command")
    def test_runs_and_parses(self, mock_run):
        mock_run.return_value = SAMPLE

        entries = query_schtasks("WEB01", AuthContext(), interface="schtasks")

        argv, interface = mock_run.call_args[0]
        assert argv[:4] == ["schtasks.exe", "/query", "/s", "WEB01"]
        assert interface == "schtasks"
        assert len(entries) == 3
