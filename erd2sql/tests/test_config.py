"""Tests for settings and logging setup."""

import logging
from erd2sql.config import get_logger, get_settings, reset_settings, setup_logging


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("MERMAID_DIAGRAM_URL", "https://example.com/er.mmd")
    reset_settings()
    settings = get_settings()
    assert settings.log_level == "debug"
    assert settings.mermaid_diagram_url == "https://example.com/er.mmd"
    assert settings.mermaid_diagram_path is None
    assert get_settings() is settings


def test_get_logger_prefixes_names():
    assert get_logger("custom").name == "erd2sql.custom"
    assert get_logger("erd2sql.parser").name == "erd2sql.parser"


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "erd2sql.log"
    setup_logging(level="WARNING", log_file=log_file)
    root = logging.getLogger("erd2sql")
    try:
        assert root.level == logging.WARNING
        assert len(root.handlers) == 2
        assert root.propagate is False
        get_logger("test").warning("hello")
        for handler in root.handlers:
            handler.flush()
        assert "erd2sql.test - WARNING - hello" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        setup_logging()
