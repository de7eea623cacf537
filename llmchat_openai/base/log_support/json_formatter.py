"""JSON logging formatter used by the client logging setup.

:class:`JsonFormatter` serializes the standard record fields and hoists the
keys of a JSON message (as produced by ``log_event``) to the top level so a
line is a single flat object instead of a double-encoded string.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

_RECORD_INTERNALS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - trivial formatting
        base = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        try:
            parsed = json.loads(msg_text)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            base.update(parsed)
        else:
            base["msg"] = msg_text
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RECORD_INTERNALS:
                continue
            if k not in base:
                base[k] = v
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
