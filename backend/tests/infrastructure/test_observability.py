"""Structured Logging — JSON formatter output and setup idempotence."""

import json
import logging
from uuid import uuid4

from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="slot booked by sponsor", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.services.booking_controller", logging.INFO, __file__, 1, msg, None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "app.services.booking_controller"
    assert log["message"] == "slot booked by sponsor"
    assert "timestamp" in log


def test_json_formatter_surfaces_booking_extras():
    slot_id, sponsor_id = uuid4(), uuid4()
    log = json.loads(JSONFormatter().format(
        _record(slot_id=slot_id, sponsor_id=sponsor_id),
    ))
    assert log["slot_id"] == str(slot_id)
    assert log["sponsor_id"] == str(sponsor_id)
    assert "publisher_id" not in log


def test_json_formatter_ignores_unknown_extras():
    log = json.loads(JSONFormatter().format(_record(secret="x")))
    assert "secret" not in log


def test_setup_logging_does_not_stack_handlers():
    import app.infrastructure.observability as obs
    if obs._handler is not None:
        logging.root.removeHandler(obs._handler)
        obs._handler = None
    before = len(logging.root.handlers)
    level = logging.root.level
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    try:
        assert len(logging.root.handlers) == before + 1
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(obs._handler)
        obs._handler = None
        logging.root.setLevel(level)
