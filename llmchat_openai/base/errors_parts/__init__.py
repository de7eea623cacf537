"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llmchat_openai.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .chat_error import (
    ChatError,
    NetworkError,
    ServerError,
    DecodingError,
    StreamError,
    ChatCancelledError,
)
from .classification import classify_exception, extract_error_message, describe_status

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
