"""Fixtures for the literal tooling tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    civiltime_logger = logging.getLogger("civiltime")
    civiltime_level = civiltime_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    civiltime_logger.setLevel(civiltime_level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CIVILTIME_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("CIVILTIME_"):
            monkeypatch.delenv(name)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()
