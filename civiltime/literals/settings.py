"""Settings for the literal checker: CLI flags, env vars and pyproject.toml.

Priority chain (highest to lowest):
  1. Init kwargs  - CLI flags passed by Click
  2. Env vars     - ``CIVILTIME_*`` prefix
  3. TOML table   - ``[tool.civiltime.literals]`` in the nearest
                    ``pyproject.toml``, discovered via walk-up
  4. Code defaults
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from civiltime.literals.expand import DEFAULT_RUNTIME_MODULE
from civiltime.literals.transform import DEFAULT_MARKER_MODULE

CONFIG_FILENAME = "pyproject.toml"
TOOL_TABLE = ("tool", "civiltime", "literals")


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


class PyprojectSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the ``[tool.civiltime.literals]`` table."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                data: Any = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            for key in TOOL_TABLE:
                data = data.get(key, {}) if isinstance(data, dict) else {}
            self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class LiteralSettings(BaseSettings):
    """Settings for ``civiltime-literals``.

    Attributes:
        marker_module: Module whose helper calls are treated as literals.
        runtime_module: Module the expanded expressions construct through.
        exclude: Glob patterns for files and directories to skip.
        config_path: The pyproject.toml the settings were read from.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CIVILTIME_",
    }

    marker_module: str = DEFAULT_MARKER_MODULE
    runtime_module: str = DEFAULT_RUNTIME_MODULE
    exclude: tuple[str, ...] = Field(
        default=(".git", ".venv", "venv", "build", "dist", "__pycache__")
    )
    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the pyproject source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            PyprojectSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> LiteralSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, otherwise discovers pyproject.toml
        by walking up from *start*. Flags whose value is None are left to
        the lower-priority sources.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_pyproject(start)

        overrides = {key: value for key, value in cli_flags.items() if value is not None}
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None


__all__ = ["find_pyproject", "PyprojectSettingsSource", "LiteralSettings"]
