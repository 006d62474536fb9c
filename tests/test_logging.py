"""Tests for structured JSON logging."""

from __future__ import annotations

import json
import logging

import pytest

from cuber.config import Settings
from cuber.logging_config import (
    JsonFormatter,
    PrettyFormatter,
    build_handler,
    setup_logging,
)


def test_json_formatter():
    """JsonFormatter outputs valid JSON with expected fields."""
    fmt = JsonFormatter()
    record = logging.LogRecord(
        name="cuber.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="inserted %s",
        args=("solve",),
        exc_info=None,
    )
    record.command = "CreateSolve"  # type: ignore[attr-defined]
    record.solve_id = 3  # type: ignore[attr-defined]
    record.count = 12  # type: ignore[attr-defined]

    data = json.loads(fmt.format(record))

    assert data["level"] == "INFO"
    assert data["logger"] == "cuber.test"
    assert data["message"] == "inserted solve"
    assert data["command"] == "CreateSolve"
    assert data["solve_id"] == 3
    assert data["count"] == 12
    assert "timestamp" in data


def test_json_formatter_no_extras():
    """JsonFormatter works without extra fields."""
    fmt = JsonFormatter()
    record = logging.LogRecord(
        name="test", level=logging.WARNING, pathname="", lineno=0,
        msg="warn", args=(), exc_info=None,
    )
    data = json.loads(fmt.format(record))
    assert data["level"] == "WARNING"
    assert "command" not in data


def test_json_formatter_includes_exception():
    fmt = JsonFormatter()
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys
        record = logging.LogRecord(
            name="test", level=logging.ERROR, pathname="", lineno=0,
            msg="failed", args=(), exc_info=sys.exc_info(),
        )
    data = json.loads(fmt.format(record))
    assert "RuntimeError: boom" in data["exception"]


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    had_flag = getattr(root, "_cuber_configured", False)
    root._cuber_configured = False  # type: ignore[attr-defined]
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    root._cuber_configured = had_flag  # type: ignore[attr-defined]


def test_setup_logging_json(clean_root_logger):
    setup_logging(Settings(log_format="json", log_level="DEBUG"))
    assert clean_root_logger.level == logging.DEBUG
    assert len(clean_root_logger.handlers) == 1
    assert isinstance(clean_root_logger.handlers[0].formatter, JsonFormatter)


def test_setup_logging_only_once(clean_root_logger):
    setup_logging(Settings(log_format="pretty", log_level="INFO"))
    handler = clean_root_logger.handlers[0]
    setup_logging(Settings(log_format="json", log_level="DEBUG"))
    assert clean_root_logger.handlers == [handler]
    assert not isinstance(handler.formatter, JsonFormatter)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("CUBER_DB_PATH", "/tmp/solves.db")
    monkeypatch.setenv("CUBER_LATEST_LIMIT", "10")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings.from_env()
    assert s.db_path == "/tmp/solves.db"
    assert s.latest_limit == 10
    assert s.log_level == "DEBUG"


def test_settings_defaults(monkeypatch):
    for name in ("CUBER_DB_PATH", "CUBER_LATEST_LIMIT", "LOG_FORMAT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.db_path.endswith("cuber.db")
    assert s.latest_limit == 12
    assert s.log_format == "pretty"


def test_pretty_formatter_appends_context():
    fmt = PrettyFormatter()
    record = logging.LogRecord(
        name="cuber.controller", level=logging.DEBUG, pathname="", lineno=0,
        msg="Deleted solve %d", args=(4,), exc_info=None,
    )
    record.solve_id = 4  # type: ignore[attr-defined]
    line = fmt.format(record)
    assert line.endswith("Deleted solve 4 (solve_id=4)")


def test_build_handler_levels():
    handler = build_handler(Settings(log_format="pretty", log_level="INFO"))
    assert handler.level == logging.INFO
    assert isinstance(handler.formatter, PrettyFormatter)
