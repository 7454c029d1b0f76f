"""Structured logging — JSON fields and idempotent setup."""

import json
import logging

from invoicer.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "invoicer.test", logging.INFO, __file__, 1, "Created invoice", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_known_extras():
    payload = json.loads(JSONFormatter().format(
        _record(invoice_id="abc", customer_id="c1", unrelated="x"),
    ))
    assert payload["message"] == "Created invoice"
    assert payload["level"] == "INFO"
    assert payload["invoice_id"] == "abc"
    assert payload["customer_id"] == "c1"
    assert "unrelated" not in payload


def test_setup_logging_does_not_duplicate_handler():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    named = [h for h in logging.root.handlers if h.get_name() == "invoicer"]
    assert len(named) == 1
    assert logging.root.level == logging.INFO
