"""Unit tests for core.logger module.

Tests the structlog configuration:
- configure_logging() installs a single stdout handler on the root logger
- LOG_FORMAT=json switches the renderer to JSON
- Request-scoped context bound via contextvars shows up in log lines
- Noisy third-party loggers are quieted
"""

import json
import logging

import pytest
import structlog

from core.logger import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _clean_root_logger():
    """Save and restore root logger state around each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    clear_contextvars()
    structlog.reset_defaults()
    configure_logging()


@pytest.mark.unit
class TestConfigureLogging:
    def test_installs_single_root_handler(self):
        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_respects_log_level(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        configure_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_unknown_log_level_defaults_to_info(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        configure_logging()

        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize("name", ["uvicorn.access", "asyncio"])
    def test_quiets_noisy_loggers(self, name: str):
        configure_logging()

        assert logging.getLogger(name).level == logging.WARNING


@pytest.mark.unit
class TestJsonOutput:
    def test_json_lines_carry_request_context(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ):
        monkeypatch.setenv("LOG_FORMAT", "json")
        structlog.reset_defaults()
        configure_logging()

        bind_contextvars(request_id="req-1")
        get_logger("tests.logger").info("participant.confirmed", participant_id="p-1")
        clear_contextvars()

        line = capsys.readouterr().out.strip().splitlines()[-1]
        parsed = json.loads(line)
        assert parsed["event"] == "participant.confirmed"
        assert parsed["participant_id"] == "p-1"
        assert parsed["request_id"] == "req-1"
        assert parsed["level"] == "info"
        assert parsed["logger"] == "tests.logger"
        assert "timestamp" in parsed
