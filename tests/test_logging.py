"""Tests for structured log formatting."""

import logging

from app.core.logging import StructuredFormatter, get_logger, log_with_context


def _record(msg="Turn finished", **extra):
    record = logging.LogRecord("app.core.agent", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_key_value_pairs():
    line = StructuredFormatter().format(_record(conversation_id="c1", extra_data={"mode": "keyword"}))

    assert "level=INFO" in line
    assert "logger=app.core.agent" in line
    assert "message=Turn finished" in line
    assert "conversation_id=c1" in line
    assert "mode=keyword" in line


def test_log_with_context_promotes_identifiers(caplog):
    logger = get_logger("tests.logging")
    logger.propagate = True

    with caplog.at_level(logging.INFO, logger="tests.logging"):
        log_with_context(logger, logging.INFO, "Ingesting", document_id="d1", chunks=5)

    record = caplog.records[-1]
    assert record.document_id == "d1"
    assert record.extra_data == {"chunks": 5}
