"""Structured logging helpers."""
from __future__ import annotations

import json
import logging

from chat_bridge.base.log_support import JsonFormatter
from chat_bridge.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


def test_child_loggers_live_under_package_root():
    assert get_logger("adapter").name == "chat_bridge.adapter"  # nosec B101
    assert get_logger("chat_bridge.stream").name == "chat_bridge.stream"  # nosec B101
    root = get_logger()
    assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)  # nosec B101


def test_log_event_drops_none_fields(log_capture):
    log_event(get_logger("chat_bridge.test"), "demo.event", LogContext(provider="groq"), level=logging.WARNING, a=1, b=None)
    (event,) = log_capture.events("demo.event")
    assert event == {"event": "demo.event", "provider": "groq", "a": 1, "levelno": logging.WARNING}  # nosec B101


def test_normalized_event_has_required_keys(log_capture):
    normalized_log_event(
        get_logger("chat_bridge.test"),
        "demo.normalized",
        LogContext(provider="openai", model="gpt-4o", stream_id=3),
        phase="finalize",
        error_code="timeout",
        tokens={"total_tokens": 5},
        note=None,
    )
    (event,) = log_capture.events("demo.normalized")
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event  # nosec B101
    assert event["structured"] is True and event["attempt"] is None  # nosec B101
    assert event["tokens"] == {"total_tokens": 5} and event["stream_id"] == 3  # nosec B101
    assert "note" not in event  # nosec B101


def test_extra_fields_never_override_normalized_values(log_capture):
    normalized_log_event(get_logger("chat_bridge.test"), "demo.clash", phase="start", emitted=2, structured="no")
    (event,) = log_capture.events("demo.clash")
    assert event["structured"] is True and event["emitted"] == 2  # nosec B101


def test_json_formatter_output():
    record = logging.LogRecord("chat_bridge.x", logging.INFO, __file__, 1, json.dumps({"event": "e"}), None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["level"] == "INFO" and line["logger"] == "chat_bridge.x"  # nosec B101


def test_configure_logger_accepts_level_names():
    logger = configure_logger(level="debug")
    try:
        assert logger.level == logging.DEBUG  # nosec B101
    finally:
        configure_logger(level=logging.INFO)
