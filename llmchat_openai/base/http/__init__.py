"""HTTP layer: async client construction and the chat transport."""

from .client import build_async_client
from .transport import ChatTransport, RawResponse, StreamedResponse

__all__ = ["build_async_client", "ChatTransport", "RawResponse", "StreamedResponse"]
