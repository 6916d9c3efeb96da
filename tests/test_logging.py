"""
tests.test_logging

Structured logging configuration.

Responsibilities:
- Check that configured loggers emit JSON lines carrying the service name.
- Restore structlog and stdlib logging state afterwards.
"""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from sqlite_store.observability.logging import configure_logging, get_logger


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    # Drop only the plain handler installed by configure_logging.
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler and isinstance(handler.stream, io.StringIO):
            root.removeHandler(handler)
    root.setLevel(level)


def test_json_lines_carry_service_name(restore_logging) -> None:
    stream = io.StringIO()
    configure_logging(service_name="sqlite-store-test", level="DEBUG", stream=stream)

    get_logger("sqlite_store.test").debug("sql.exec", sql="SELECT 1", params=None)

    line = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert line["event"] == "sql.exec"
    assert line["service"] == "sqlite-store-test"
    assert line["level"] == "debug"
    assert line["logger"] == "sqlite_store.test"
    assert line["sql"] == "SELECT 1"
    assert "timestamp" in line


def test_level_filters_debug_events(restore_logging) -> None:
    stream = io.StringIO()
    configure_logging(service_name="sqlite-store-test", level="INFO", stream=stream)

    log = get_logger("sqlite_store.test.filtered")
    log.debug("sql.exec", sql="SELECT 1")
    log.info("store.ready")

    events = [json.loads(line)["event"] for line in stream.getvalue().splitlines()]
    assert events == ["store.ready"]


# --- Module Notes -----------------------------------------------------------
# configure_logging caches loggers on first use; the fixture resets structlog so
# later tests see the default configuration.
