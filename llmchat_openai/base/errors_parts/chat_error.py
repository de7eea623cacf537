"""
Structured chat client exception types.

Every failure surfaced by the client is one of the five categories below.
Each category is classified once, at the point where it originates, and then
propagated unchanged to the caller.

- ``NetworkError``: the request could not be completed at the transport level
  (DNS, connect, TLS, timeout, connection reset). Wraps the underlying
  ``httpx`` exception as ``cause``.
- ``ServerError``: the server answered with an error envelope or a status
  outside 200-299. Carries ``status_code`` and a human readable ``message``.
- ``DecodingError``: a buffered response body could not be decoded into the
  expected shape.
- ``StreamError``: a streamed chunk could not be decoded.
- ``ChatCancelledError``: the caller requested cancellation.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode


class ChatError(Exception):
    """Base class for all chat client failures.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        cause: Optional original exception for diagnostics.
    """

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


class NetworkError(ChatError):
    """Transport level failure (no usable HTTP response)."""

    code = ErrorCode.NETWORK

    def __init__(self, cause: BaseException, message: Optional[str] = None) -> None:
        super().__init__(message or (str(cause) or type(cause).__name__), cause=cause)


class ServerError(ChatError):
    """Server-reported failure: error envelope or non-2xx status."""

    code = ErrorCode.SERVER

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value} ({self.status_code}): {self.message}"


class DecodingError(ChatError):
    """The buffered response body did not match the expected shape."""

    code = ErrorCode.DECODING

    def __init__(self, cause: BaseException, message: Optional[str] = None) -> None:
        super().__init__(message or f"failed to decode response: {cause}", cause=cause)


class StreamError(ChatError):
    """A streamed chunk could not be decoded."""

    code = ErrorCode.STREAM


class ChatCancelledError(ChatError):
    """Raised when an operation is cancelled cooperatively.

    Distinguishes caller-requested cancellation from every other failure so
    callers can suppress log noise or skip error reporting.
    """

    code = ErrorCode.CANCELLED

    def __init__(self, reason: Optional[str] = None) -> None:
        super().__init__(reason or "operation cancelled")
        self.reason = reason


__all__ = [
    "ChatError",
    "NetworkError",
    "ServerError",
    "DecodingError",
    "StreamError",
    "ChatCancelledError",
]
