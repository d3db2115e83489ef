"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest

from workon.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("workon").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("workon").level == logging.WARNING

    def test_single_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_stdlib_logger_renders_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("workon.services.resolve").warning("can't load module: %s", "x")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "can't load module: x"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "workon.services.resolve"
        assert "timestamp" in parsed

    def test_debug_hidden_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("workon.infrastructure.manifest").debug("Loaded module")
        assert capfd.readouterr().err == ""

    def test_console_mode_renders_message(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=False)
        logging.getLogger("workon.services.resolve").warning("Skipping root %s: %s", "/x", "gone")
        err = capfd.readouterr().err
        assert "Skipping root /x: gone" in err
        assert "workon.services.resolve" in err

    def test_json_mode_includes_traceback(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        try:
            raise RuntimeError("plugin broke")
        except RuntimeError:
            logging.getLogger("workon.services.base").debug(
                "Event dispatch failed for %s", "post_resolve", exc_info=True
            )
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Event dispatch failed for post_resolve"
        assert "RuntimeError: plugin broke" in parsed["exception"]
