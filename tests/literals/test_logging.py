"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from civiltime.errors import IndeterminateOffset
from civiltime.literals.logging import configure_logging
from civiltime.units.local import local_offset_at


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("civiltime").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("civiltime").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("civiltime.test")
        log.warning("hello world", key="val")

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("civiltime.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "civiltime.test"
        assert "timestamp" in parsed

    def test_library_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        """stdlib records from library modules share the JSON structure."""
        configure_logging(verbose=True, log_json=True)

        def provider(unix_timestamp: int) -> int:
            return 86_400

        with pytest.raises(IndeterminateOffset):
            local_offset_at(0, provider)

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Local offset lookup at 0 returned 86400"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "civiltime.units.local"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("libcst").debug("parser noise")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1

    def test_json_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        """Only the event, its keywords and the shared fields are rendered."""
        configure_logging(verbose=True, log_json=True)
        structlog.contextvars.bind_contextvars(request="ignored")
        try:
            structlog.get_logger("civiltime.literals").info("expanded literals", count=2)
        finally:
            structlog.contextvars.clear_contextvars()
        parsed = json.loads(capfd.readouterr().err.strip())
        assert set(parsed) == {"event", "count", "level", "logger", "timestamp"}
