"""Server-sent event line parsing for chat completion streams.

Only ``data:`` lines matter. The 6-character ``data: `` prefix is removed (a
bare ``data:`` without the space is accepted too); a payload that trims to
``[DONE]`` ends the stream. Blank lines, ``:`` comments and ``event:`` /
``id:`` / ``retry:`` fields are ignored.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pydantic

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..errors import StreamError, extract_error_message
from ..models import CompletionChunk


class SSELineKind(str, Enum):
    IGNORED = "ignored"
    DATA = "data"
    DONE = "done"


class StreamState(str, Enum):
    """Lifecycle of a single streamed response."""

    AWAITING_HEADER = "awaiting_header"
    STREAMING = "streaming"
    TERMINATED_OK = "terminated_ok"
    TERMINATED_ERROR = "terminated_error"
    TERMINATED_CANCELLED = "terminated_cancelled"

    @property
    def terminal(self) -> bool:
        return self not in (StreamState.AWAITING_HEADER, StreamState.STREAMING)


@dataclass(frozen=True)
class SSELine:
    kind: SSELineKind
    payload: Optional[str] = None


_IGNORED = SSELine(SSELineKind.IGNORED)
_DONE = SSELine(SSELineKind.DONE)


def parse_sse_line(line: str) -> SSELine:
    """Classify one body line of an event stream."""
    if not line.startswith(SSE_DATA_PREFIX):
        return _IGNORED
    payload = line[len(SSE_DATA_PREFIX):]
    if payload.startswith(" "):
        payload = payload[1:]
    if payload.strip() == SSE_DONE_SENTINEL:
        return _DONE
    return SSELine(SSELineKind.DATA, payload)


def decode_chunk(payload: str) -> CompletionChunk:
    """Decode a ``data:`` payload into a :class:`CompletionChunk`.

    Raises:
        StreamError: the payload is not a valid chunk. When the payload is an
            error envelope the server's message is used.
    """
    try:
        return CompletionChunk.model_validate_json(payload)
    except pydantic.ValidationError as exc:
        message = extract_error_message(payload)
        if message is None:
            message = f"failed to decode stream chunk: {exc.errors(include_url=False)[0]['msg']}"
        raise StreamError(message, cause=exc) from exc


__all__ = [
    "SSELineKind",
    "SSELine",
    "StreamState",
    "parse_sse_line",
    "decode_chunk",
]
