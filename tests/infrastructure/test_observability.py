"""Structured logging — JSON fields surfaced only when present, one handler per process."""

import json
import logging

import pytest

from taskboard.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "taskboard.test", logging.WARNING, __file__, 1, "Board %s", ("gone",), None,
    )
    record.__dict__.update(extra)
    return record


def test_formats_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "WARNING"
    assert out["logger"] == "taskboard.test"
    assert out["message"] == "Board gone"
    assert "timestamp" in out
    assert "user_id" not in out


def test_surfaces_known_extra_fields_only():
    out = json.loads(JSONFormatter().format(
        _record(user_id="u1", board_id="b1", error_code="RESOURCE_NOT_FOUND", other="x"),
    ))
    assert out["user_id"] == "u1"
    assert out["board_id"] == "b1"
    assert out["error_code"] == "RESOURCE_NOT_FOUND"
    assert "other" not in out


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_replaces_its_own_handler(root_logger):
    first = setup_logging("DEBUG", "json")
    second = setup_logging("WARNING", "text")

    assert first not in root_logger.handlers
    assert second in root_logger.handlers
    assert not isinstance(second.formatter, JSONFormatter)
    assert root_logger.level == logging.WARNING


def test_timestamp_comes_from_the_record():
    record = _record()
    record.created = 0
    out = json.loads(JSONFormatter().format(record))
    assert out["timestamp"].startswith("1970-01-01T00:00:00")
