"""JSON log formatter: context variables and structured extras."""

import json
import logging

from identity_core.config.logging import JsonFormatter, configure_logging
from identity_core.core.context import use_context


def _record(message="user_locked", **extra):
    record = logging.LogRecord("identity_core.test", logging.INFO, __file__, 1, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_format_includes_request_context():
    with use_context("tenant-1", actor_id="alice", correlation_id="corr-1"):
        payload = json.loads(JsonFormatter().format(_record()))
    assert payload["message"] == "user_locked"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "identity_core.test"
    assert payload["tenant_id"] == "tenant-1"
    assert payload["actor_id"] == "alice"
    assert payload["correlation_id"] == "corr-1"


def test_format_without_context_emits_nulls():
    payload = json.loads(JsonFormatter().format(_record()))
    assert payload["tenant_id"] is None
    assert payload["actor_id"] is None


def test_format_carries_extra_fields():
    payload = json.loads(JsonFormatter().format(_record(user_id="u-1", missing=["API_READ"])))
    assert payload["user_id"] == "u-1"
    assert payload["missing"] == ["API_READ"]


def test_configure_logging_installs_json_handler():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        configure_logging("DEBUG")
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(level)


def test_configure_logging_twice_keeps_one_json_handler():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        configure_logging("INFO")
        handler = configure_logging("WARNING")
        json_handlers = [h for h in root.handlers if isinstance(h.formatter, JsonFormatter)]
        assert json_handlers == [handler]
        assert root.level == logging.WARNING
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(level)


def test_timestamp_comes_from_record():
    record = _record()
    record.created = 0.0
    payload = json.loads(JsonFormatter().format(record))
    assert payload["timestamp"] == "1970-01-01T00:00:00+00:00"
