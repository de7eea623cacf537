"""
Error classification helpers.

Maps arbitrary exceptions to normalized ``ErrorCode`` values for logging,
extracts the server message from an ``{"error": {"message": ...}}`` envelope,
and renders the fallback description used when a non-2xx response carries no
envelope.
"""
from __future__ import annotations

import json
from typing import Optional, Union

import httpx
import pydantic

from ..constants import SSE_DATA_PREFIX
from .error_code import ErrorCode
from .chat_error import ChatError


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ChatError passthrough.
        2. ``httpx.TransportError`` (connect, read, write, timeout, protocol).
        3. JSON / pydantic validation errors.
        4. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ChatError):
        return exc.code
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.NETWORK
    if isinstance(exc, (json.JSONDecodeError, pydantic.ValidationError)):
        return ErrorCode.DECODING
    return ErrorCode.UNKNOWN


def extract_error_message(content: Union[bytes, str, None]) -> Optional[str]:
    """Return the ``error.message`` of a JSON error envelope, if any.

    Accepts raw bytes or text. A leading SSE ``data:`` prefix is tolerated so
    the same helper serves buffered bodies and streamed error lines. Anything
    that is not an object with an ``error`` object holding a string
    ``message`` yields ``None``.
    """
    if not content:
        return None
    text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content
    text = text.strip()
    if text.startswith(SSE_DATA_PREFIX):
        text = text[len(SSE_DATA_PREFIX):].strip()
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return message if isinstance(message, str) else None


def describe_status(status_code: int, reason: Optional[str] = None, body: Union[bytes, str, None] = None) -> str:
    """Render ``"HTTP <status> <reason>"`` plus the body text when present.

    The status code always appears in the result so callers can match on it.
    """
    phrase = reason or httpx.codes.get_reason_phrase(status_code)
    head = f"HTTP {status_code} {phrase}".rstrip()
    if body:
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        text = text.strip()
        if text:
            return f"{head}: {text}"
    return head


__all__ = [
    "classify_exception",
    "extract_error_message",
    "describe_status",
]
