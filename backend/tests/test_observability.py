"""Logging setup: JSON formatter fields and handler idempotence."""

import json
import logging
import sys

import pytest

from calendar_api.infrastructure.observability import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logging():
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "calendar_api.core.calendar_store", logging.INFO, __file__, 1,
        "Created task %s", (3,), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "calendar_api.core.calendar_store"
    assert out["message"] == "Created task 3"
    assert "timestamp" in out


def test_json_formatter_surfaces_extras():
    out = json.loads(JSONFormatter().format(_record(task_id=3, date="2024-01-10")))
    assert out["task_id"] == 3
    assert out["date"] == "2024-01-10"
    assert "error_code" not in out


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    out = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in out["exception"]


def test_setup_logging_does_not_stack_handlers(restore_root_logging):
    before = len(logging.root.handlers)
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")
    assert len(logging.root.handlers) == before + 1
    assert logging.root.level == logging.WARNING


def test_setup_logging_json_uses_json_formatter(restore_root_logging):
    setup_logging("INFO", "json")
    assert isinstance(logging.root.handlers[-1].formatter, JSONFormatter)


def test_unknown_level_falls_back_to_info(restore_root_logging):
    setup_logging("chatty", "text")
    assert logging.root.level == logging.INFO
