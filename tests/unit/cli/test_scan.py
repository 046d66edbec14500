"""Unit tests for the scan command."""

import json
from pathlib import Path

from typer.testing import CliRunner

from accountctl.cli.main import app

runner = CliRunner()


class TestScanCommand:
    """Tests for accountctl scan."""

    def test_scan_table(self, settings_file: Path, tmp_path: Path) -> None:
        """Observed accounts are listed per category."""
        (tmp_path / "authors" / "alice").mkdir(parents=True)
        (tmp_path / "mods" / "bob").mkdir(parents=True)

        result = runner.invoke(app, ["scan"])

        assert result.exit_code == 0
        assert "Observed Accounts" in result.stdout
        assert "alice" in result.stdout
        assert "2 account(s) found." in result.stdout

    def test_scan_json_single_category(self, settings_file: Path, tmp_path: Path) -> None:
        """--category limits the scan to one category."""
        (tmp_path / "authors" / "alice").mkdir(parents=True)
        (tmp_path / "mods" / "bob").mkdir(parents=True)

        result = runner.invoke(app, ["scan", "--category", "authors", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"authors": ["alice"]}

    def test_invalid_category(self, settings_file: Path) -> None:
        """Unknown categories are rejected by the option parser."""
        result = runner.invoke(app, ["scan", "--category", "guests"])
        assert result.exit_code != 0
