"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import json
import logging

from llmchat_openai.base.log_support import JsonFormatter
from llmchat_openai.base.logging import (
    BASE_LOGGER_NAME,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="llmchat.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_hoists_json_message() -> None:
    """The formatter hoists JSON message keys without double escaping."""
    payload = json.loads(JsonFormatter().format(_record(json.dumps({"event": "chat.start", "model": "gpt-4o"}))))
    assert payload["event"] == "chat.start" and payload["model"] == "gpt-4o"  # nosec B101 - validates hoisting
    assert payload["logger"] == "llmchat.test.json"  # nosec B101 - asserts are fine in tests
    assert "msg" not in payload  # nosec B101 - structured events suppress raw message noise


def test_json_formatter_keeps_plain_messages() -> None:
    payload = json.loads(JsonFormatter().format(_record("plain text")))
    assert payload["msg"] == "plain text" and payload["level"] == "INFO"  # nosec B101 - asserts are fine in tests


def test_get_logger_prefixes_child_names() -> None:
    assert get_logger("client").name == "llmchat.client"  # nosec B101 - asserts are fine in tests
    assert get_logger("llmchat.stream").name == "llmchat.stream"  # nosec B101 - asserts are fine in tests
    assert get_logger().name == BASE_LOGGER_NAME  # nosec B101 - asserts are fine in tests
    assert get_logger().propagate is False  # nosec B101 - shared logger owns its handlers


def test_level_env_is_honoured(monkeypatch) -> None:
    monkeypatch.setenv("LLMCHAT_LOG_LEVEL", "ERROR")
    try:
        assert get_logger().level == logging.ERROR  # nosec B101 - asserts are fine in tests
    finally:
        monkeypatch.delenv("LLMCHAT_LOG_LEVEL")
        get_logger()
    assert get_logger().level == logging.INFO  # nosec B101 - asserts are fine in tests


def test_normalized_log_event_includes_required_keys(log_capture) -> None:
    logger = get_logger("test.normalized")
    ctx = LogContext(model="gpt-4o", endpoint="https://api.test.invalid", request_id="r1")
    normalized_log_event(
        logger,
        "stream.finalize",
        ctx,
        phase="finalize",
        attempt=1,
        emitted=True,
        tokens=(("prompt", 1), ("completion", 2), ("total", 3)),
        extra_field=123,
        phase_override=None,
    )
    (payload,) = log_capture.events("stream.finalize")
    for k in ("structured", "phase", "attempt", "emitted", "tokens"):
        assert k in payload  # nosec B101 - asserts are fine in tests
    assert "error_code" not in payload  # nosec B101 - asserts are fine in tests
    assert payload["tokens"] == {"prompt": 1, "completion": 2, "total": 3}  # nosec B101 - asserts are fine in tests
    assert payload["extra_field"] == 123 and "phase_override" not in payload  # nosec B101 - asserts are fine in tests
    assert payload["model"] == "gpt-4o" and payload["request_id"] == "r1"  # nosec B101 - asserts are fine in tests
    assert log_capture[-1].levelno == logging.INFO  # nosec B101 - asserts are fine in tests


def test_error_events_default_to_warning(log_capture) -> None:
    normalized_log_event(get_logger("test.normalized"), "chat.error", phase="finalize", error_code="network")
    assert log_capture[-1].levelno == logging.WARNING  # nosec B101 - asserts are fine in tests
    assert log_capture.events("chat.error")[0]["error_code"] == "network"  # nosec B101 - asserts are fine in tests


def test_log_event_drops_none_unless_kept(log_capture) -> None:
    logger = get_logger("test.plain")
    log_event(logger, "a", value=None, other=1)
    log_event(logger, "b", keep_none=True, value=None)
    assert log_capture.events("a")[0] == {"event": "a", "other": 1}  # nosec B101 - asserts are fine in tests
    assert log_capture.events("b")[0] == {"event": "b", "value": None}  # nosec B101 - asserts are fine in tests


def test_configure_logger_file_handler(tmp_path) -> None:
    path = tmp_path / "logs" / "llmchat.log"
    logger = configure_logger(level="INFO", file_path=str(path))
    try:
        log_event(get_logger("test.file"), "file.check", marker=7)
        for handler in logger.handlers:
            handler.flush()
        lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
        assert any(line.get("event") == "file.check" and line.get("marker") == 7 for line in lines)  # nosec B101 - asserts are fine in tests
    finally:
        configure_logger(file_path=None)
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)  # nosec B101 - asserts are fine in tests
