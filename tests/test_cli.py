"""CLI tests using Typer's CliRunner."""

import json
import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from evalo import __version__
from evalo.config.ui_config import set_palette_config
from evalo.main import app

runner = CliRunner()


@pytest.fixture
def evalo_logger():
    """The package logger, with handlers and level restored afterwards."""
    pkg_logger = logging.getLogger("evalo")
    saved_handlers, saved_level = pkg_logger.handlers[:], pkg_logger.level
    pkg_logger.handlers.clear()
    yield pkg_logger
    for handler in pkg_logger.handlers:
        handler.close()
    pkg_logger.handlers[:] = saved_handlers
    pkg_logger.setLevel(saved_level)


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Usage:" in result.stdout
        assert "commands" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_invalid_command(self):
        result = runner.invoke(app, ["nonexistent-command"])
        assert result.exit_code != 0


class TestCommandsListing:
    def test_student_table(self):
        result = runner.invoke(app, ["commands", "--role", "student"])
        assert result.exit_code == 0
        assert "Go to Home" in result.stdout
        assert "My Profile" in result.stdout
        assert "Manage Users" not in result.stdout

    def test_guest_json(self):
        result = runner.invoke(app, ["commands", "--json"])
        assert result.exit_code == 0
        ids = [entry["id"] for entry in json.loads(result.stdout)]
        assert ids == ["home", "dashboard", "logout", "profile"]

    def test_admin_query_json(self):
        result = runner.invoke(app, ["commands", "--role", "admin", "--query", "copy", "--json"])
        assert result.exit_code == 0
        entries = json.loads(result.stdout)
        assert [e["id"] for e in entries] == ["toggle-copy"]
        assert entries[0]["action"] == {"capability": "toggle_copy_paste", "args": []}

    def test_no_results(self):
        result = runner.invoke(app, ["commands", "--query", "zzz"])
        assert result.exit_code == 0
        assert "No results found" in result.stdout

    def test_registry_file(self, tmp_path):
        path = tmp_path / "commands.yaml"
        path.write_text(
            "commands:\n"
            "  - {id: grades, title: Show Grades, icon: G, section: Student,"
            " action: {capability: navigate_to, args: [grades]}}\n"
        )
        result = runner.invoke(app, ["commands", "--registry", str(path), "--json"])
        assert result.exit_code == 0
        assert [e["id"] for e in json.loads(result.stdout)] == ["grades"]

    def test_registry_from_config(self, tmp_path):
        path = tmp_path / "commands.yaml"
        path.write_text("commands:\n  - {id: out, title: Sign Out, action: {capability: logout}}\n")
        set_palette_config({"open_key": "ctrl+k", "registry_path": str(path)})
        result = runner.invoke(app, ["commands", "--json"])
        assert result.exit_code == 0
        assert [e["id"] for e in json.loads(result.stdout)] == ["out"]

    def test_bad_registry_file_exits_1(self, tmp_path):
        path = tmp_path / "commands.yaml"
        path.write_text("commands:\n  - {id: x, title: X, action: {capability: explode}}\n")
        result = runner.invoke(app, ["commands", "--registry", str(path)])
        assert result.exit_code == 1


class TestRunCommand:
    def test_run_builds_app(self):
        with (
            patch("evalo.ui.app.EvaloApp.run") as m_run,
            patch("evalo.utils.logging_utils.setup_tui_logging") as m_logging,
        ):
            result = runner.invoke(app, ["run", "--role", "teacher"])
        assert result.exit_code == 0
        m_run.assert_called_once_with()
        m_logging.assert_called_once_with(verbose=False)


class TestVerbose:
    def test_verbose_writes_debug_log(self, tmp_path, evalo_logger):
        path = tmp_path / "commands.yaml"
        path.write_text("commands:\n  - {id: out, title: Sign Out, action: {capability: logout}}\n")
        result = runner.invoke(app, ["--verbose", "commands", "--registry", str(path)])
        assert result.exit_code == 0
        assert evalo_logger.level == logging.DEBUG
        assert any(isinstance(h, RotatingFileHandler) for h in evalo_logger.handlers)
        assert "Loaded 1 palette commands" in (tmp_path / "evalo.log").read_text()

    def test_quiet_by_default(self, evalo_logger):
        result = runner.invoke(app, ["commands", "--json"])
        assert result.exit_code == 0
        assert evalo_logger.handlers == []
