"""
Normalized chat client error codes (taxonomy).

Defines the `ErrorCode` enumeration attached to every raised ``ChatError`` and
used as the ``error_code`` field of structured log events. Values are
lowercase snake_case and are considered a stable public contract.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    NETWORK = "network"
    SERVER = "server"
    DECODING = "decoding"
    STREAM = "stream"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
