"""Tests for the civiltime-literals CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from civiltime import __version__
from civiltime.literals.cli import cli

VALID = 'from civiltime import macros\n\nEPOCH = macros.date("1970-01-01")\n'
INVALID = 'from civiltime import macros\n\nBAD = macros.date("2021-02-29")\n'


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty project directory used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "civiltime-literals" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


class TestCheckCommand:
    def test_valid(self, cli_runner: CliRunner, project: Path) -> None:
        (project / "dates.py").write_text(VALID)
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "Checked 1 file(s), all literals valid." in result.output

    def test_invalid(self, cli_runner: CliRunner, project: Path) -> None:
        (project / "dates.py").write_text(INVALID)
        result = cli_runner.invoke(cli, ["check", "dates.py"])
        assert result.exit_code == 1
        assert "dates.py:3:7: invalid day in literal '2021-02-29'" in result.output
        assert "Found 1 invalid literal(s)." in result.output

    def test_unparseable_file(self, cli_runner: CliRunner, project: Path) -> None:
        (project / "broken.py").write_text("def broken(:\n")
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 1
        assert "cannot process" in result.output

    def test_missing_path(self, cli_runner: CliRunner, project: Path) -> None:
        result = cli_runner.invoke(cli, ["check", "nowhere.py"])
        assert result.exit_code == 2

    def test_marker_module_option(self, cli_runner: CliRunner, project: Path) -> None:
        (project / "dates.py").write_text('from app import lit\nX = lit.time("24:00")\n')
        assert cli_runner.invoke(cli, ["check"]).exit_code == 0
        result = cli_runner.invoke(cli, ["--marker-module", "app.lit", "check"])
        assert result.exit_code == 1
        assert "invalid hour" in result.output

    def test_exclude_from_pyproject(self, cli_runner: CliRunner, project: Path) -> None:
        (project / "pyproject.toml").write_text('[tool.civiltime.literals]\nexclude = ["generated"]\n')
        (project / "generated").mkdir()
        (project / "generated" / "bad.py").write_text(INVALID)
        (project / "good.py").write_text(VALID)
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "Checked 1 file(s)" in result.output


class TestExpandCommand:
    def test_prints_by_default(self, cli_runner: CliRunner, project: Path) -> None:
        target = project / "dates.py"
        target.write_text(VALID)
        result = cli_runner.invoke(cli, ["expand", "dates.py"])
        assert result.exit_code == 0
        assert "# dates.py" in result.output
        assert "EPOCH = civiltime.Date(1970, 1, 1)" in result.output
        assert target.read_text() == VALID

    def test_write(self, cli_runner: CliRunner, project: Path) -> None:
        target = project / "dates.py"
        target.write_text(VALID)
        result = cli_runner.invoke(cli, ["expand", "--write", "dates.py"])
        assert result.exit_code == 0
        assert "Expanded 1 literal(s) in dates.py" in result.output
        assert target.read_text() == (
            "import civiltime\n"
            "from civiltime import macros\n"
            "\n"
            "EPOCH = civiltime.Date(1970, 1, 1)\n"
        )

    def test_invalid_writes_nothing(self, cli_runner: CliRunner, project: Path) -> None:
        good = project / "good.py"
        bad = project / "bad.py"
        good.write_text(VALID)
        bad.write_text(INVALID)
        result = cli_runner.invoke(cli, ["expand", "--write"])
        assert result.exit_code == 1
        assert "nothing expanded" in result.output
        assert good.read_text() == VALID
        assert bad.read_text() == INVALID

    def test_runtime_module_option(self, cli_runner: CliRunner, project: Path) -> None:
        (project / "dates.py").write_text(VALID)
        result = cli_runner.invoke(cli, ["--runtime-module", "ct", "expand", "dates.py"])
        assert result.exit_code == 0
        assert "EPOCH = ct.Date(1970, 1, 1)" in result.output


class TestGlobalFlags:
    def test_verbose_flag_accepted(self, cli_runner: CliRunner, project: Path) -> None:
        (project / "dates.py").write_text(VALID)
        result = cli_runner.invoke(cli, ["-v", "check"])
        assert result.exit_code == 0

    def test_log_json_flag_accepted(self, cli_runner: CliRunner, project: Path) -> None:
        result = cli_runner.invoke(cli, ["--log-json", "--version"])
        assert result.exit_code == 0

    def test_config_option(self, cli_runner: CliRunner, project: Path) -> None:
        config = project / "conf" / "pyproject.toml"
        config.parent.mkdir()
        config.write_text('[tool.civiltime.literals]\nmarker_module = "app.lit"\n')
        (project / "dates.py").write_text('from app import lit\nX = lit.time("24:00")\n')
        result = cli_runner.invoke(cli, ["-c", str(config), "check", "dates.py"])
        assert result.exit_code == 1
        assert "invalid hour" in result.output
