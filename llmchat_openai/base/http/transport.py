"""Chat transport: authenticated HTTP calls against one endpoint pair.

Purpose:
    Send request bodies produced by the request builder and hand back either
    a fully read response or an open streaming response. The transport does
    not interpret bodies; decoding and error envelopes are handled by the
    decoder and the stream parser.

Headers:
    ``Content-Type: application/json`` and ``Authorization: Bearer <key>`` are
    always sent. Caller-supplied headers override them on a case-insensitive
    name collision.

Failure modes:
    Every ``httpx.RequestError`` (connect, read, write, timeout, protocol,
    content decoding) is re-raised as :class:`NetworkError` with the original
    exception chained. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncGenerator, Mapping, Optional

import httpx

from ..constants import JSON_CONTENT_TYPE
from ..errors import NetworkError
from ..timeouts import TimeoutConfig
from .client import build_async_client


@dataclass(frozen=True)
class RawResponse:
    """Status, reason phrase and full body of a buffered response."""

    status_code: int
    content: bytes
    reason: Optional[str] = None


class StreamedResponse:
    """An open streaming response whose body has not been consumed yet."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._closed = False

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason(self) -> str:
        return self._response.reason_phrase

    @property
    def closed(self) -> bool:
        return self._closed

    async def lines(self) -> AsyncGenerator[str, None]:
        """Yield body lines as they arrive (line terminators stripped)."""
        try:
            async for line in self._response.aiter_lines():
                yield line
        except httpx.RequestError as exc:
            raise NetworkError(exc) from exc

    async def harvest_lines(self, limit: int) -> str:
        """Read at most ``limit`` lines of the body and join them.

        Used on non-2xx streaming responses to find an error envelope without
        reading an unbounded body.
        """
        collected = []
        lines = self.lines()
        try:
            async for line in lines:
                collected.append(line)
                if len(collected) >= limit:
                    break
        finally:
            await lines.aclose()
        return "\n".join(collected)

    async def aclose(self) -> None:
        """Release the underlying connection (idempotent)."""
        if self._closed:
            return
        self._closed = True
        await self._response.aclose()


class ChatTransport:
    """Immutable endpoint, credential and header configuration plus an HTTP client.

    Parameters:
        api_key: Bearer token sent on every request.
        endpoint: Chat completions URL.
        models_endpoint: Models listing URL.
        headers: Extra headers; override the defaults on collision.
        timeout: Timeout configuration for a client created here.
        http_client: Pre-built ``httpx.AsyncClient`` to use instead of
            creating one. An injected client is not closed by ``aclose``.
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        models_endpoint: str,
        headers: Optional[Mapping[str, str]] = None,
        *,
        timeout: Optional[TimeoutConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._endpoint = endpoint
        self._models_endpoint = models_endpoint
        merged = httpx.Headers({"Content-Type": JSON_CONTENT_TYPE, "Authorization": f"Bearer {api_key}"})
        if headers:
            merged.update(headers)
        self._headers = merged
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else build_async_client(timeout)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def models_endpoint(self) -> str:
        return self._models_endpoint

    @property
    def headers(self) -> httpx.Headers:
        """Copy of the headers sent on every request."""
        return httpx.Headers(self._headers)

    async def execute_buffered(self, body: bytes) -> RawResponse:
        """POST ``body`` to the chat endpoint and read the full response."""
        try:
            response = await self._client.post(self._endpoint, content=body, headers=self._headers)
        except httpx.RequestError as exc:
            raise NetworkError(exc) from exc
        return RawResponse(response.status_code, response.content, response.reason_phrase)

    async def open_stream(self, body: bytes) -> StreamedResponse:
        """POST ``body`` and return once the response headers have arrived."""
        request = self._client.build_request("POST", self._endpoint, content=body, headers=self._headers)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.RequestError as exc:
            raise NetworkError(exc) from exc
        return StreamedResponse(response)

    async def fetch_models(self) -> RawResponse:
        """GET the models endpoint and read the full response."""
        try:
            response = await self._client.get(self._models_endpoint, headers=self._headers)
        except httpx.RequestError as exc:
            raise NetworkError(exc) from exc
        return RawResponse(response.status_code, response.content, response.reason_phrase)

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()


__all__ = ["RawResponse", "StreamedResponse", "ChatTransport"]
