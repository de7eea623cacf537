"""Shared wire-level constants for request building and stream parsing.

Kept free of imports so every layer (models, builder, decoder, streaming)
can depend on it without cycles.
"""
from __future__ import annotations

# SSE framing
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# Request envelope keys owned by the builder; options may not set these.
KEY_MODEL = "model"
KEY_MODELS = "models"
KEY_ROUTE = "route"
KEY_MESSAGES = "messages"
KEY_STREAM = "stream"
KEY_STREAM_OPTIONS = "stream_options"

RESERVED_ENVELOPE_KEYS = frozenset(
    {KEY_MODEL, KEY_MODELS, KEY_ROUTE, KEY_MESSAGES, KEY_STREAM, KEY_STREAM_OPTIONS}
)

# Routing marker paired with ``models`` when the host supports fallback.
ROUTE_FALLBACK = "fallback"

# Number of lines read from a failed streaming response when looking for an
# error envelope.
ERROR_BODY_HARVEST_LINES = 20

JSON_CONTENT_TYPE = "application/json"

__all__ = [
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "KEY_MODEL",
    "KEY_MODELS",
    "KEY_ROUTE",
    "KEY_MESSAGES",
    "KEY_STREAM",
    "KEY_STREAM_OPTIONS",
    "RESERVED_ENVELOPE_KEYS",
    "ROUTE_FALLBACK",
    "ERROR_BODY_HARVEST_LINES",
    "JSON_CONTENT_TYPE",
]
