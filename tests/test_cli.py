"""
Test suite for the command-line entry point.
"""

import contextlib
import csv
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from svchound import cli, config
from svchound.exceptions import ExportError, QueryError
from svchound.filters import DEFAULT_TASK_EXCLUSIONS
from svchound.models.result import FailureKind, HostStatus


@pytest.fixture(autouse=True)
def no_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "CONFIG_PATHS", [])


def _args(**overrides):
    base = dict(
        target=None,
        targets_file=None,
        no_default_exclusions=False,
        config_exclusions=[],
        exclude_task=[],
        output=None,
        status_json=None,
    )
    base.update(overrides)
    return SimpleNamespace(**base)


class TestDefaultOutputPath:
    """Tests for default_output_path function"""

    def test_timestamp_format(self):
        assert cli.default_output_path(datetime(2024, 3, 5, 7, 8, 9)) == "ServiceAccounts_20240305_070809.csv"


class TestCollectTargets:
    """Tests for collect_targets function"""

    def test_comma_list_keeps_order_and_duplicates(self):
        assert cli.collect_targets(_args(target="WEB02, WEB01,,WEB02")) == ["WEB02", "WEB01", "WEB02"]

    def test_targets_file_appended(self, tmp_path):
        f = tmp_path / "hosts.txt"
        f.write_text("OLD01\n\n  SQL01  \n", encoding="utf-8")
        assert cli.collect_targets(_args(target="WEB01", targets_file=str(f))) == ["WEB01", "OLD01", "SQL01"]

    @patch("svchound.cli.local_hostname", return_value="MYPC")
    def test_defaults_to_local_host(self, mock_name):
        assert cli.collect_targets(_args()) == ["MYPC"]


class TestBuildExclusions:
    """Tests for build_exclusions function"""

    def test_defaults_plus_terms(self):
        terms = cli.build_exclusions(_args(config_exclusions=["Vendor"], exclude_task=["Mine", "Vendor"]))
        assert terms[: len(DEFAULT_TASK_EXCLUSIONS)] == tuple(DEFAULT_TASK_EXCLUSIONS)
        assert terms[-2:] == ("Vendor", "Mine")

    def test_no_defaults(self):
        assert cli.build_exclusions(_args(no_default_exclusions=True, exclude_task=["X"])) == ("X",)


class TestMain:
    """Tests for main function"""

    def test_help(self, capsys):
        with pytest.raises(SystemExit):
            cli.main(["--help"])
        out = capsys.readouterr().out
        assert "--exclude-task" in out
        assert "--targets-file" in out

    @patch("svchound.engine.orchestrator.is_reachable", return_value=False)
    def test_unreachable_host_exports_header(self, mock_reach, tmp_path):
        out = tmp_path / "out.csv"

        code = cli.main(["-t", "DOWN01", "-o", str(out)])

        assert code == 0
        with open(out, encoding="utf-8", newline="") as f:
            assert list(csv.reader(f)) == [["ComputerName", "Name", "StartName", "StartMode", "State", "TaskPath", "Type"]]

    @patch("svchound.engine.orchestrator.remote_os_version", return_value=(10, 0))
    @patch("svchound.engine.orchestrator.is_reachable", return_value=True)
    @patch("svchound.sources.tasks.query_tasks_modern")
    @patch("svchound.sources.services.query_services_wmi")
    @patch("svchound.sources.services.query_services_cim")
    def test_end_to_end(self, mock_cim, mock_wmi, mock_tasks, mock_reach, mock_ver, tmp_path,
                        sample_services, sample_tasks):
        mock_cim.side_effect = QueryError("CIM", "WinRM: connection refused")
        mock_wmi.return_value = sample_services
        mock_tasks.return_value = sample_tasks
        out = tmp_path / "out.csv"
        status_json = tmp_path / "status.json"

        code = cli.main(["-t", "WEB01", "-o", str(out), "--status-json", str(status_json)])

        assert code == 0
        with open(out, encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert [(r["ComputerName"], r["Name"], r["Type"]) for r in rows] == [
            ("WEB01", "SvcBackup", "Service"),
            ("WEB01", "AppPoolSvc", "Service"),
            ("WEB01", "NightlyReport", "Task"),
        ]
        assert status_json.exists()

    @patch("svchound.cli.write_csv", side_effect=ExportError("disk full"))
    @patch("svchound.cli.HostOrchestrator")
    def test_export_failure_exit_code(self, mock_orch, mock_write):
        mock_orch.return_value.run.return_value = [HostStatus("DOWN01", failures=[FailureKind.HOST_UNREACHABLE])]

        assert cli.main(["-t", "DOWN01"]) == 1

    @patch("svchound.cli.HostOrchestrator")
    def test_log_file_written(self, mock_orch, tmp_path):
        mock_orch.return_value.run.return_value = []
        log = tmp_path / "run.log"

        code = cli.main(["-t", "H1", "-o", str(tmp_path / "o.csv"), "--log-file", str(log)])

        assert code == 0
        assert "CSV EXPORT" in log.read_text(encoding="utf-8")

    @patch("svchound.cli.HostOrchestrator")
    def test_auth_passed_to_orchestrator(self, mock_orch, tmp_path):
        mock_orch.return_value.run.return_value = []

        with contextlib.suppress(SystemExit):
            cli.main(["-t", "H1", "-u", "admin", "-p", "pw", "-d", "CORP", "-o", str(tmp_path / "o.csv")])

        auth = mock_orch.call_args[1]["auth"]
        assert auth.principal == "CORP\\admin"
        assert auth.password == "pw"
