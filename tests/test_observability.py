"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from mysys.core.observability.logging_config import _parse_level, resolve_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flag_precedence(self):
        env = {"MYSYS_LOG_LEVEL": "INFO"}
        assert resolve_level(debug=True, verbose=True, quiet=True, environ=env) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True, environ=env) == "INFO"
        assert resolve_level(quiet=True, environ=env) == "ERROR"

    def test_env_then_default(self):
        assert resolve_level(environ={"MYSYS_LOG_LEVEL": "debug"}) == "debug"
        assert resolve_level(environ={}) == "WARNING"
        assert resolve_level() == "WARNING"


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_fallback_to_warning(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("") == logging.WARNING
        assert _parse_level("chatty") == logging.WARNING


class TestSetupLogging:
    def test_console_level(self, restore_root_logger):
        setup_logging("INFO")
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_minimal_format_at_warning(self, restore_root_logger):
        setup_logging("WARNING")
        record = logging.LogRecord("mysys", logging.WARNING, __file__, 1, "hello", None, None)
        assert restore_root_logger.handlers[0].format(record) == "[WARNING] hello"

    def test_file_handler_with_own_level(self, restore_root_logger, tmp_path: Path):
        log_file = tmp_path / "logs" / "mysys.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert root.handlers[0].level == logging.WARNING
        logging.getLogger("mysys.test").debug("to the file only")
        for handler in root.handlers:
            handler.flush()
        assert "to the file only" in log_file.read_text()
