"""Tests for settings and logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from tool_protocol.config import Settings
from tool_protocol.logging_config import LongValueFilter, initialize_logging


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test default configuration values."""
    for name in ("ENVIRONMENT", "LOG_LEVEL", "LOG_TOOL_PARAMS", "RECEIVED_PREVIEW_LENGTH"):
        monkeypatch.delenv(f"TOOL_PROTOCOL_{name}", raising=False)

    config = Settings(_env_file=None)

    assert config.environment == "auto"
    assert config.log_level == "INFO"
    assert config.log_tool_params is False
    assert config.received_preview_length == 50


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test environment variables override defaults."""
    monkeypatch.setenv("TOOL_PROTOCOL_ENVIRONMENT", "server")
    monkeypatch.setenv("TOOL_PROTOCOL_LOG_TOOL_PARAMS", "true")
    monkeypatch.setenv("TOOL_PROTOCOL_RECEIVED_PREVIEW_LENGTH", "20")

    config = Settings(_env_file=None)

    assert config.environment == "server"
    assert config.log_tool_params is True
    assert config.received_preview_length == 20


def test_settings_reject_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test invalid configuration fails fast."""
    monkeypatch.setenv("TOOL_PROTOCOL_ENVIRONMENT", "mainframe")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_preview_length_minimum() -> None:
    """Test the preview length has a lower bound."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, received_preview_length=2)


def _record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


def test_long_value_filter_truncates() -> None:
    """Test oversized messages are cut."""
    record = _record("params: %s", "x" * 100)

    assert LongValueFilter(max_length=20).filter(record) is True
    assert record.getMessage() == "params: " + "x" * 12 + "... [truncated 88 chars]"


def test_long_value_filter_keeps_short_messages() -> None:
    """Test short messages are untouched."""
    record = _record("short %s", "message")

    LongValueFilter(max_length=20).filter(record)

    assert record.getMessage() == "short message"


def test_initialize_logging_attaches_filter() -> None:
    """Test the truncating filter is installed on root handlers once."""
    root = logging.getLogger()
    handler = logging.StreamHandler()
    root.addHandler(handler)
    try:
        initialize_logging("DEBUG")
        initialize_logging("DEBUG")

        filters = [f for f in handler.filters if isinstance(f, LongValueFilter)]
        assert len(filters) == 1
    finally:
        root.removeHandler(handler)
        for h in root.handlers:
            for f in [f for f in h.filters if isinstance(f, LongValueFilter)]:
                h.removeFilter(f)
