"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``llmchat_openai.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` may be cancelled from any thread; coroutines observe
  it either by polling (``raise_if_cancelled``) or by racing a pending await
  against it (``race``).
- ``ChatCancelledError`` is raised by operations that observe a cancellation
  request.
"""

from .errors import ChatCancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "ChatCancelledError"]
