"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from protogen.core.observability.logging_config import _parse_level, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_console_level(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_handler_lowers_root_level(self, tmp_path: Path):
        log_file = tmp_path / "protogen.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("protogen.test").debug("primary: messages")
        for handler in root.handlers:
            handler.flush()
        assert "primary: messages" in log_file.read_text()

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(level="DEBUG")
        setup_logging(level="ERROR")
        assert len(logging.getLogger().handlers) == 1


class TestParseLevel:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("bogus", logging.WARNING),
            (None, logging.WARNING),
        ],
    )
    def test_parse(self, name, expected):
        assert _parse_level(name) == expected


class TestResolveLevel:
    def test_flags_take_precedence(self, monkeypatch):
        monkeypatch.setenv("PROTOGEN_LOG_LEVEL", "ERROR")
        assert resolve_level(debug=True, verbose=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("PROTOGEN_LOG_LEVEL", "INFO")
        assert resolve_level() == "INFO"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("PROTOGEN_LOG_LEVEL", raising=False)
        assert resolve_level() == "WARNING"
