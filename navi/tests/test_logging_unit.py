"""Focused tests for navi.base.logging.

Covers:
- _parse_level string parsing
- log_event payload shape and None pruning
- normalized_log_event required keys
- configure_logger file handler management and level persistence
"""
from __future__ import annotations

import json
import logging

from navi.base.log_support import JsonFormatter, LogContext
from navi.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def _capture(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = get_logger(name)
    handler = _ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level("WARN") == logging.WARNING
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR


def test_log_event_merges_context_and_drops_none():
    logger, handler = _capture("navi.test.log_event")
    try:
        log_event(logger, "session.start", LogContext(provider="mock", session_id=3), segments=2, model=None)
    finally:
        logger.removeHandler(handler)
    payload = json.loads(handler.messages[-1])
    assert payload == {"event": "session.start", "provider": "mock", "session_id": 3, "segments": 2}


def test_normalized_log_event_emits_required_keys():
    logger, handler = _capture("navi.test.normalized")
    try:
        normalized_log_event(
            logger,
            "stream.finalize",
            LogContext(provider="p", model="m"),
            phase="finalize",
            error_code="timeout",
            emitted=True,
            tokens={"input_tokens": 10},
            attempt=None,
        )
    finally:
        logger.removeHandler(handler)
    payload = json.loads(handler.messages[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload
    assert payload["attempt"] is None
    assert payload["tokens"] == {"input_tokens": 10}


def test_normalized_log_event_omits_error_code_on_success():
    logger, handler = _capture("navi.test.normalized_ok")
    try:
        normalized_log_event(logger, "session.finalize", phase="finalize")
    finally:
        logger.removeHandler(handler)
    payload = json.loads(handler.messages[-1])
    assert "error_code" not in payload
    assert payload["phase"] == "finalize"


def test_json_formatter_hoists_event_fields():
    record = logging.LogRecord("navi.x", logging.INFO, __file__, 1, json.dumps({"event": "a.b", "n": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "a.b" and out["n"] == 1 and out["level"] == "INFO"


def test_configure_logger_attaches_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "navi.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        file_handlers = [h for h in logger.handlers if getattr(h, "_navi_file_handler", False)]
        assert len(file_handlers) == 1
        log_event(get_logger("navi.test.file"), "file.check")
        file_handlers[0].flush()
        assert "file.check" in path.read_text(encoding="utf-8")
    finally:
        logger = configure_logger(level="INFO", file_path=None)
    assert not [h for h in logger.handlers if getattr(h, "_navi_file_handler", False)]


def test_configured_level_survives_later_get_logger_calls(monkeypatch):
    get_logger("navi.test.level")
    logger = configure_logger(level="ERROR")
    try:
        monkeypatch.setenv("NAVI_LOG_LEVEL", "DEBUG")
        get_logger("navi.test.level.again")
        assert get_logger("navi").level == logging.ERROR
        assert all(h.level == logging.ERROR for h in logger.handlers)
    finally:
        configure_logger(level="INFO")
