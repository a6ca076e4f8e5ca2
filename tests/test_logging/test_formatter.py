"""Tests for structured JSON logging."""

import io
import json
import logging
import sys
from collections.abc import Generator

import pytest

from endsong.logging import JSONLogFormatter, configure_logging


@pytest.fixture
def restore_root_logger() -> Generator[None]:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def _record(message: str = "hello %s", args: tuple[object, ...] = ("world",)) -> logging.LogRecord:
    return logging.LogRecord("endsong.store", logging.INFO, __file__, 1, message, args, None)


def test_format_emits_single_json_line() -> None:
    line = JSONLogFormatter(service="endsong-api").format(_record())
    assert "\n" not in line
    entry = json.loads(line)
    assert entry["message"] == "hello world"
    assert entry["level"] == "INFO"
    assert entry["service"] == "endsong-api"
    assert entry["logger"] == "endsong.store"
    assert "timestamp" in entry
    assert "request_id" not in entry


def test_format_includes_context_fields() -> None:
    record = _record()
    record.request_id = "abc123"
    record.source = "endsong_0.json"
    record.records = 0
    record.unrelated = "dropped"
    entry = json.loads(JSONLogFormatter().format(record))
    assert entry["request_id"] == "abc123"
    assert entry["source"] == "endsong_0.json"
    assert entry["records"] == 0
    assert "unrelated" not in entry


def test_format_includes_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("endsong", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    entry = json.loads(JSONLogFormatter().format(record))
    assert "ValueError: boom" in entry["exception"]


def test_configure_logging_replaces_root_handlers(restore_root_logger: None) -> None:
    stream = io.StringIO()
    configure_logging("endsong-test", "debug", stream=stream)
    handler = configure_logging("endsong-test", "debug", stream=stream)

    root = logging.getLogger()
    assert root.handlers == [handler]
    assert root.level == logging.DEBUG

    logging.getLogger("endsong.test").debug("parsed", extra={"source": "a.json"})
    entry = json.loads(stream.getvalue().strip())
    assert entry["service"] == "endsong-test"
    assert entry["source"] == "a.json"
