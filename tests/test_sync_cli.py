# ============================================================================
# SYNC CLI TESTS
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Tests - Synchronization command line tool
# PURPOSE: Verify tools/sync_actions.py against the in-memory registry
# CREATED: 19 OCT 2026
# ============================================================================
"""
Sync CLI Tests

Runs tools/sync_actions.main() with --memory, so no database is needed.
Logging setup is patched out to leave pytest's handlers alone.

Run with:
    pytest tests/test_sync_cli.py -v
"""

import importlib.util
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from handlers import get_catalog

_CLI_PATH = Path(__file__).resolve().parent.parent / "tools" / "sync_actions.py"
_spec = importlib.util.spec_from_file_location("sync_actions", _CLI_PATH)
sync_actions = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(sync_actions)


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(sync_actions, "configure_logging", MagicMock())


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        sync_actions.main(argv)
    return exc.value.code


class TestSyncCli:
    """sync_actions.py end to end over an empty in-memory registry."""

    def test_json_report_lists_builtin_actions(self, capsys):
        code = _run(["--memory", "--json"])

        report = json.loads(capsys.readouterr().out)
        assert code == 0
        assert sorted(report["inserted"]) == sorted(get_catalog().list_all())
        assert report["orphans"] == []
        assert report["failures"] == []

    def test_text_report(self, capsys):
        code = _run(["--memory", "--delete-orphans"])

        out = capsys.readouterr().out
        assert code == 0
        assert f"Added:    {len(get_catalog())}" in out
        assert "  + publish_subject" in out
        assert "Orphans:  0" in out
        assert "Failures: 0" in out

    def test_config_file_applied(self, tmp_path, capsys):
        path = tmp_path / "actions.yaml"
        path.write_text("actions:\n  publish_subject_triggers:\n    node_presave: true\n")

        assert _run(["--memory", "--json", "--config", str(path)]) == 0
        assert json.loads(capsys.readouterr().out)["inserted"]

    def test_unreadable_config_exits_1(self, tmp_path, capsys):
        code = _run(["--memory", "--config", str(tmp_path / "missing.yaml")])

        assert code == 1
        assert "Could not load config" in capsys.readouterr().err
