"""Structured Logging — JSON formatter fields and setup idempotence."""

import json
import logging

from cruder.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "cruder.http", logging.WARNING, __file__, 1, "http_request", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "cruder.http"
    assert payload["message"] == "http_request"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    record = _record(status=404, path="/api/v1/users/id/9", secret="x")
    payload = json.loads(JSONFormatter().format(record))
    assert payload["status"] == 404
    assert payload["path"] == "/api/v1/users/id/9"
    assert "secret" not in payload


def test_setup_logging_does_not_stack_handlers():
    before = list(logging.root.handlers)
    original_level = logging.root.level
    try:
        setup_logging("DEBUG", "json")
        setup_logging("INFO", "text")
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) == 1
        assert logging.root.level == logging.INFO
    finally:
        for handler in logging.root.handlers[:]:
            if handler not in before:
                logging.root.removeHandler(handler)
        logging.root.setLevel(original_level)
