"""llmchat_openai package

Async client for OpenAI-compatible chat completion APIs.

Public API (re-exported):
    - Client: :class:`ChatClient`, :class:`ChatStream`
    - Messages & options: :class:`ChatMessage`, :class:`Role`,
      :class:`TextPart`, :class:`ImagePart`, :class:`ImageDetail`,
      :class:`ChatOptions`, :class:`Tool`, :class:`ToolChoice`,
      :class:`ResponseFormat`, :class:`Prediction`
    - Responses: :class:`Completion`, :class:`CompletionChunk`,
      :class:`Usage`, :class:`ModelList`, :func:`accumulate_chunks`
    - Errors: :class:`ChatError` and its five categories, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`
    - Version: ``__version__``
"""

from .base.cancellation import CancellationToken
from .base.errors import (
    ChatCancelledError,
    ChatError,
    DecodingError,
    ErrorCode,
    NetworkError,
    ServerError,
    StreamError,
)
from .base.models import (
    ChatMessage,
    ChatOptions,
    Completion,
    CompletionChunk,
    FinishReason,
    ImageDetail,
    ImagePart,
    ModelInfo,
    ModelList,
    Prediction,
    ResponseFormat,
    Role,
    TextPart,
    Tool,
    ToolChoice,
    ToolFunction,
    Usage,
)
from .base.routing import FALLBACK_HOSTS, supports_fallback
from .base.streaming import ChatStream, StreamState, accumulate_chunks
from .base.timeouts import TimeoutConfig
from .client import ChatClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatClient",
    "ChatStream",
    "StreamState",
    "accumulate_chunks",
    "CancellationToken",
    "ChatError",
    "NetworkError",
    "ServerError",
    "DecodingError",
    "StreamError",
    "ChatCancelledError",
    "ErrorCode",
    "ChatMessage",
    "ChatOptions",
    "Completion",
    "CompletionChunk",
    "FinishReason",
    "ImageDetail",
    "ImagePart",
    "ModelInfo",
    "ModelList",
    "Prediction",
    "ResponseFormat",
    "Role",
    "TextPart",
    "Tool",
    "ToolChoice",
    "ToolFunction",
    "Usage",
    "FALLBACK_HOSTS",
    "supports_fallback",
    "TimeoutConfig",
]
