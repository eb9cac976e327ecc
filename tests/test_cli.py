"""Tests for vendsim CLI."""

import json
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from vendsim.cli import cli
from vendsim.logger import SessionLog


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def temp_project():
    """Create a temporary project directory with no global config."""
    with tempfile.TemporaryDirectory() as tmpdir:
        original_cwd = os.getcwd()
        os.chdir(tmpdir)
        with patch(
            "vendsim.config.get_global_config_dir",
            return_value=Path(tmpdir) / "global",
        ):
            yield Path(tmpdir)
        os.chdir(original_cwd)


class TestCLI:
    """Test main CLI commands."""

    def test_help(self, runner):
        """Test --help option."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "vendsim - Console vending machine simulator" in result.output

    def test_version(self, runner):
        """Test --version option."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "vendsim, version" in result.output

    def test_no_subcommand_runs_machine(self, runner, temp_project):
        """Test that bare vendsim starts the machine."""
        result = runner.invoke(cli, [], input="q\n")
        assert result.exit_code == 0
        assert "VENDING MACHINE" in result.output
        assert "Goodbye!" in result.output


class TestRunCommand:
    """Test vendsim run command."""

    def test_run_help(self, runner):
        result = runner.invoke(cli, ["run", "--help"])
        assert result.exit_code == 0
        assert "Start the interactive vending machine" in result.output

    def test_full_session(self, runner, temp_project):
        """Test buying an item and collecting change on quit."""
        result = runner.invoke(cli, ["run"], input="I\n100\n100\ndone\nS\nC1\nn\nQ\n")

        assert result.exit_code == 0
        assert "*** DISPENSING: Chocolate Bar (C1) ***" in result.output
        assert "You have a remaining balance." in result.output
        assert "*** RETURNING CHANGE: 100p ***" in result.output
        assert "  100p x 1" in result.output

    def test_end_of_input_exits_cleanly(self, runner, temp_project):
        """Test that running out of input exits with code 0."""
        result = runner.invoke(cli, ["run"], input="I\n50\n")
        assert result.exit_code == 0
        assert "Goodbye!" not in result.output

    def test_no_log_files_by_default(self, runner, temp_project):
        """Test that no files are written without logging enabled."""
        runner.invoke(cli, ["run"], input="q\n")
        assert not (temp_project / ".vendsim").exists()

    def test_log_dir_option(self, runner, temp_project):
        """Test that --log-dir records the session."""
        log_dir = temp_project / "logs"
        result = runner.invoke(
            cli, ["run", "--log-dir", str(log_dir)], input="i\n50\ndone\nq\n"
        )
        assert result.exit_code == 0

        log_files = list(log_dir.glob("session-*.ndjson"))
        assert len(log_files) == 1
        types = [e["type"] for e in SessionLog.open(log_files[0]).read_events()]
        assert types == [
            SessionLog.SESSION_START,
            SessionLog.COIN_INSERTED,
            SessionLog.CHANGE_RETURNED,
            SessionLog.SESSION_END,
        ]

    def test_config_title(self, runner, temp_project):
        """Test that the display title comes from the config file."""
        config_file = temp_project / "custom.yaml"
        config_file.write_text("display:\n  title: SNACK BAR\n")

        result = runner.invoke(cli, ["run", "--config", str(config_file)], input="q\n")
        assert result.exit_code == 0
        assert "========== SNACK BAR ==========" in result.output

    def test_missing_config_file(self, runner, temp_project):
        """Test that a missing config file is reported."""
        result = runner.invoke(cli, ["run", "--config", "missing.yaml"], input="q\n")
        assert result.exit_code == 1
        assert "Failed to load config" in result.output

    @pytest.mark.parametrize(
        "content",
        ["display: [unclosed\n", "display: SNACKS\n", "logging: true\n"],
    )
    def test_invalid_config_file(self, runner, temp_project, content):
        """Test that malformed YAML or a malformed section is reported."""
        config_file = temp_project / "bad.yaml"
        config_file.write_text(content)

        result = runner.invoke(cli, ["run", "--config", str(config_file)], input="q\n")
        assert result.exit_code == 1
        assert "Failed to load config" in result.output


class TestChangeCommand:
    """Test vendsim change command."""

    def test_change_95(self, runner):
        result = runner.invoke(cli, ["change", "95"])
        assert result.exit_code == 0
        assert "Change for 95p:" in result.output
        assert "  50p x 1\n  20p x 2\n  5p x 1\n" in result.output

    def test_change_zero(self, runner):
        result = runner.invoke(cli, ["change", "0"])
        assert result.exit_code == 0
        assert "(no coins)" in result.output

    def test_change_remainder(self, runner):
        result = runner.invoke(cli, ["change", "97"])
        assert result.exit_code == 0
        assert "Not returnable: 2p" in result.output

    def test_change_negative(self, runner):
        result = runner.invoke(cli, ["change", "--", "-5"])
        assert result.exit_code == 2


class TestMenuCommand:
    """Test vendsim menu command."""

    def test_menu(self, runner):
        result = runner.invoke(cli, ["menu"])
        assert result.exit_code == 0
        assert result.output.startswith("========== VENDING MACHINE ==========")
        assert "Crisps (Salt)" in result.output
        assert "Balance: 0p" in result.output


class TestSummaryCommand:
    """Test vendsim summary command."""

    @pytest.fixture
    def log_file(self, tmp_path: Path) -> Path:
        log = SessionLog(log_dir=tmp_path, session_id="session-test")
        log.log_coin_inserted(200, 200)
        log.log_item_dispensed("A1", 150, 50)
        log.log_change_returned(50, {50: 1})
        log.log_session_end(0)
        return log.get_log_path()

    def test_summary_text(self, runner, log_file):
        result = runner.invoke(cli, ["summary", str(log_file)])
        assert result.exit_code == 0
        assert "Session: session-test" in result.output
        assert "Coins inserted: 1 (200p)" in result.output
        assert "Items dispensed: 1 (150p)" in result.output
        assert "Change returned: 50p" in result.output

    def test_summary_json(self, runner, log_file):
        result = runner.invoke(cli, ["summary", str(log_file), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["total_sales"] == 150
        assert data["total_events"] == 5

    def test_summary_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["summary", str(tmp_path / "missing.ndjson")])
        assert result.exit_code == 2
