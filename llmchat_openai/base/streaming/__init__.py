"""Streaming primitives: SSE parsing, the chunk stream and its metrics."""

from .sse import SSELine, SSELineKind, StreamState, decode_chunk, parse_sse_line
from .streaming_metrics import StreamMetrics, apply_usage, build_token_usage
from .accumulate import accumulate_chunks
from .chat_stream import ChatStream

__all__ = [
    "SSELine",
    "SSELineKind",
    "StreamState",
    "decode_chunk",
    "parse_sse_line",
    "StreamMetrics",
    "apply_usage",
    "build_token_usage",
    "accumulate_chunks",
    "ChatStream",
]
