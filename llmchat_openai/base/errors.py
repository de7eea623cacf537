"""Unified chat client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llmchat_openai.base.errors_parts`` so callers have a single stable import
path for every failure the client can raise.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.chat_error import (
    ChatError,
    NetworkError,
    ServerError,
    DecodingError,
    StreamError,
    ChatCancelledError,
)
from .errors_parts.classification import (
    classify_exception,
    extract_error_message,
    describe_status,
)

__all__ = [
    "ErrorCode",
    "ChatError",
    "NetworkError",
    "ServerError",
    "DecodingError",
    "StreamError",
    "ChatCancelledError",
    "classify_exception",
    "extract_error_message",
    "describe_status",
]
