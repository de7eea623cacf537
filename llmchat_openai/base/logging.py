"""Structured logging utilities for the chat client.

Rationale:
- One place configures the shared ``llmchat`` logger (JSON lines on stderr by
  default, level from ``LLMCHAT_LOG_LEVEL``).
- Modules obtain child loggers through ``get_logger`` and emit events through
  ``log_event`` / ``normalized_log_event`` so every event is one flat JSON
  object.

Normalized schema:
``normalized_log_event`` guarantees the keys ``structured``, ``phase``,
``attempt``, ``emitted`` and ``tokens`` on every event; ``error_code`` is
present only for failures. Client events: ``chat.start``, ``chat.end``,
``chat.error``, ``stream.start``, ``stream.decode_error``,
``stream.finalize``, ``models.start``, ``models.end``, ``models.error``.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "llmchat"
LEVEL_ENV = "LLMCHAT_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_llmchat_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_llmchat_console_handler"
_FILE_HANDLER_ATTR = "_llmchat_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name (case-insensitive); unknown names give ``default``."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``llmchat`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != desired_level:
            logger.setLevel(desired_level)
            for handler in logger.handlers:
                handler.setLevel(desired_level)
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return the shared logger or a child of it (``llmchat.<name>``)."""
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level (number or name). ``None`` keeps the current level.
    file_path: Optional[str]
        Attach a rotating file handler (10MB x 5) writing to this path, or
        replace the one previously attached here. ``None`` removes it.
    json_mode: bool
        JSON formatter when True, plain text otherwise.

    Returns
    -------
    logging.Logger
        The shared ``llmchat`` logger.

    Notes
    -----
    Handlers attached by callers are left untouched; only handlers tagged by
    this module are replaced or removed.
    """
    logger = get_logger(json_mode=json_mode)

    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    for h in logger.handlers:
        if getattr(h, _CONSOLE_HANDLER_ATTR, False):
            h.setFormatter(_formatter(json_mode))

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            h.setFormatter(_formatter(json_mode))
            h.setLevel(logger.level)
            return logger
        logger.removeHandler(h)
        h.close()
    if abs_path is None:
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit one structured event as a JSON message.

    ``None`` valued fields are dropped unless ``keep_none`` is True.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info (mapping, pairs or opaque value) into JSON-friendly form."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    if isinstance(tokens, (list, tuple)):
        with contextlib.suppress(TypeError, ValueError):
            return dict(tokens)
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int | None = None,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized key set.

    Extra fields never overwrite a normalized value that is already set.
    Events with an ``error_code`` default to WARNING level.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None:
            continue
        if k in base_fields and base_fields[k] is not None:
            continue
        base_fields[k] = v
    if level is None:
        level = logging.WARNING if error_code is not None else logging.INFO
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "JsonFormatter",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
]
