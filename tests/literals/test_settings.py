"""Tests for LiteralSettings: CLI flags, env vars and pyproject.toml."""

from __future__ import annotations

from pathlib import Path

import click
import pydantic
import pytest

from civiltime.literals.settings import LiteralSettings, find_pyproject


def _write_table(path: Path, body: str) -> Path:
    path.write_text(f"[tool.civiltime.literals]\n{body}")
    return path


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no pyproject.toml and no env vars, code defaults apply."""
        settings = LiteralSettings.from_cli(start=tmp_path)
        assert settings.marker_module == "civiltime.macros"
        assert settings.runtime_module == "civiltime"
        assert ".venv" in settings.exclude
        assert settings.verbose is False
        assert settings.log_json is False

    def test_frozen(self, tmp_path: Path) -> None:
        settings = LiteralSettings.from_cli(start=tmp_path)
        with pytest.raises(pydantic.ValidationError):
            settings.verbose = True  # type: ignore[misc]

    def test_none_flags_ignored(self, tmp_path: Path) -> None:
        """Flags left as None fall through to lower-priority sources."""
        settings = LiteralSettings.from_cli(start=tmp_path, verbose=None, marker_module=None)
        assert settings.verbose is False
        assert settings.marker_module == "civiltime.macros"


class TestPyprojectSource:
    def test_loads_table(self, tmp_path: Path) -> None:
        config = _write_table(
            tmp_path / "pyproject.toml",
            'marker_module = "app.lit"\nexclude = ["generated", "*.pyi"]\n',
        )
        settings = LiteralSettings.from_cli(start=tmp_path)
        assert settings.marker_module == "app.lit"
        assert settings.exclude == ("generated", "*.pyi")
        assert settings.runtime_module == "civiltime"  # default preserved
        assert settings.config_path == config.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        _write_table(tmp_path / "pyproject.toml", 'runtime_module = "ct"\n')
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)
        assert find_pyproject(nested) == (tmp_path / "pyproject.toml").resolve()
        assert LiteralSettings.from_cli(start=nested).runtime_module == "ct"

    def test_other_tables_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n[tool.other]\nverbose = true\n')
        settings = LiteralSettings.from_cli(start=tmp_path)
        assert settings.verbose is False

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "settings.toml"
        custom.parent.mkdir()
        _write_table(custom, 'marker_module = "custom.lit"\n')
        settings = LiteralSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.marker_module == "custom.lit"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.civiltime.literals\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            LiteralSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CIVILTIME_VERBOSE", "true")
        settings = LiteralSettings.from_cli(start=tmp_path)
        assert settings.verbose is True

    def test_env_over_pyproject(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_table(tmp_path / "pyproject.toml", 'runtime_module = "from_toml"\n')
        monkeypatch.setenv("CIVILTIME_RUNTIME_MODULE", "from_env")
        settings = LiteralSettings.from_cli(start=tmp_path)
        assert settings.runtime_module == "from_env"

    def test_env_var_tuple(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CIVILTIME_EXCLUDE", '["a", "b"]')
        settings = LiteralSettings.from_cli(start=tmp_path)
        assert settings.exclude == ("a", "b")

    def test_cli_over_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CIVILTIME_MARKER_MODULE", "from_env")
        settings = LiteralSettings.from_cli(start=tmp_path, marker_module="from_cli")
        assert settings.marker_module == "from_cli"

    def test_cli_over_pyproject(self, tmp_path: Path) -> None:
        _write_table(tmp_path / "pyproject.toml", "log_json = true\n")
        settings = LiteralSettings.from_cli(start=tmp_path, log_json=False)
        assert settings.log_json is False
