"""Unit tests for structured logging setup."""

from __future__ import annotations

import logging

import pytest

from bacmap.core.logging import build_handlers, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestConfigureLogging:
    """Test handler installation."""

    def test_installs_named_handler(self, restore_root_logger) -> None:
        configure_logging(level="debug", json_logs=True)

        ours = [h for h in restore_root_logger.handlers if h.get_name() == "bacmap"]
        assert len(ours) >= 1
        assert restore_root_logger.level == logging.DEBUG

    def test_repeated_calls_replace_handlers(self, restore_root_logger) -> None:
        configure_logging()
        first = [h for h in restore_root_logger.handlers if h.get_name() == "bacmap"]
        configure_logging()
        second = [h for h in restore_root_logger.handlers if h.get_name() == "bacmap"]

        assert len(first) == len(second)
        assert not set(first) & set(second)

    def test_level_from_environment(self, monkeypatch, restore_root_logger) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        configure_logging()

        assert restore_root_logger.level == logging.WARNING


class TestRendering:
    """Test stdlib records rendered through structlog."""

    def _render(self, json_logs: bool) -> str:
        handler = build_handlers(json_logs)[0]
        record = logging.LogRecord(
            "bacmap.matching.templates", logging.INFO, __file__, 1, "Applied template t1", None, None
        )
        return handler.format(record)

    def test_json(self) -> None:
        rendered = self._render(json_logs=True)

        assert '"event": "Applied template t1"' in rendered
        assert '"logger": "bacmap.matching.templates"' in rendered
        assert '"level": "info"' in rendered

    def test_console(self) -> None:
        assert "Applied template t1" in self._render(json_logs=False)
