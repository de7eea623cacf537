"""Cancellable asynchronous sequence of streamed completion chunks.

Lifecycle
---------
``ChatStream`` is lazy and single-pass. Nothing is sent until the first
``__anext__`` (or ``async with``). Then:

1. ``AWAITING_HEADER``: the request is sent and the status checked. A
   non-2xx response is drained for at most a few lines looking for an error
   envelope and raises ``ServerError``.
2. ``STREAMING``: each ``data:`` line is decoded and yielded in arrival order.
   Other lines are skipped. ``[DONE]`` (or the end of the body) terminates the
   stream normally and nothing after it is read.
3. Terminal (``TERMINATED_OK`` / ``TERMINATED_ERROR`` /
   ``TERMINATED_CANCELLED``): the connection has been released and further
   iteration raises ``StopAsyncIteration``.

Failure modes
-------------
- ``ServerError``: non-2xx status at open.
- ``StreamError``: a malformed chunk. The stream terminates; later chunks are
  not delivered.
- ``NetworkError``: transport failure at open or mid-stream.
- ``ChatCancelledError``: ``cancel()`` was called or the caller's token was
  cancelled. A pending read is interrupted immediately.
- ``asyncio.CancelledError``: the consuming task was cancelled; the
  connection is released and the error propagates unchanged.

Releasing the connection
------------------------
Reaching a terminal state releases it. So do ``cancel()``, ``aclose()`` and
leaving ``async with``. ``async for`` iterates through a generator whose
``finally`` calls ``aclose()``; breaking out of the loop releases the
connection once the event loop finalizes that generator. Use ``async with``
for an immediate release.

Every terminal path emits exactly one ``stream.finalize`` log event.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import AsyncGenerator, List, Optional

from ..cancellation import CancellationToken
from ..constants import ERROR_BODY_HARVEST_LINES
from ..errors import (
    ChatCancelledError,
    ChatError,
    ErrorCode,
    ServerError,
    StreamError,
    classify_exception,
    describe_status,
    extract_error_message,
)
from ..http.transport import ChatTransport, StreamedResponse
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import Completion, CompletionChunk, Usage
from .accumulate import accumulate_chunks
from .sse import SSELineKind, StreamState, decode_chunk, parse_sse_line
from .streaming_metrics import StreamMetrics, apply_usage


def _harvest_message(body: str) -> Optional[str]:
    message = extract_error_message(body)
    if message is not None:
        return message
    for line in body.splitlines():
        message = extract_error_message(line)
        if message is not None:
            return message
    return None


class ChatStream:
    """Async iterator over the chunks of one streamed chat completion.

    Parameters:
        transport: Transport used to open the request.
        body: Encoded request body (already carrying ``stream: true``).
        context: Log context for this request.
        cancellation_token: Optional caller token; cancelling it cancels the
            stream. The stream owns a child token so ``cancel()`` never
            affects the caller's token.
        logger: Logger for lifecycle events.
    """

    def __init__(
        self,
        transport: ChatTransport,
        body: bytes,
        *,
        context: Optional[LogContext] = None,
        cancellation_token: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._transport = transport
        self._body = body
        self._ctx = context or LogContext(endpoint=transport.endpoint)
        self._token = cancellation_token.child() if cancellation_token is not None else CancellationToken()
        self._logger = logger or get_logger("llmchat.stream")
        self._state = StreamState.AWAITING_HEADER
        self._response: Optional[StreamedResponse] = None
        self._lines: Optional[AsyncGenerator[str, None]] = None
        self._error: Optional[BaseException] = None
        self._usage: Optional[Usage] = None
        self._metrics = StreamMetrics()
        self._started: Optional[float] = None

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def error(self) -> Optional[BaseException]:
        """The failure that terminated the stream, if any."""
        return self._error

    @property
    def usage(self) -> Optional[Usage]:
        """Usage from the last chunk that carried it."""
        return self._usage

    @property
    def metrics(self) -> StreamMetrics:
        return self._metrics

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; safe to call from any thread, idempotent."""
        self._token.cancel(reason)

    def __aiter__(self) -> AsyncGenerator[CompletionChunk, None]:
        return self._iterate()

    async def _iterate(self) -> AsyncGenerator[CompletionChunk, None]:
        # Closed by the loop's async generator finalizer when an ``async for``
        # is abandoned, which releases the connection.
        try:
            while True:
                try:
                    chunk = await self.__anext__()
                except StopAsyncIteration:
                    return
                yield chunk
        finally:
            await self.aclose()

    async def __aenter__(self) -> "ChatStream":
        await self._guard(self._open())
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def __anext__(self) -> CompletionChunk:
        if self._state.terminal:
            raise StopAsyncIteration
        chunk = await self._guard(self._next_chunk())
        if chunk is None:
            raise StopAsyncIteration
        return chunk

    async def aclose(self) -> None:
        """Release the connection; a stream closed early counts as cancelled."""
        if not self._state.terminal:
            await self._finish(StreamState.TERMINATED_CANCELLED, None)

    async def collect(self) -> Completion:
        """Drain the stream and fold every chunk into one completion."""
        chunks: List[CompletionChunk] = [chunk async for chunk in self]
        return accumulate_chunks(chunks)

    async def _guard(self, step):
        try:
            return await step
        except ChatCancelledError as exc:
            await self._finish(StreamState.TERMINATED_CANCELLED, exc)
            raise
        except ChatError as exc:
            await self._finish(StreamState.TERMINATED_ERROR, exc)
            raise
        except asyncio.CancelledError:
            await self._finish(StreamState.TERMINATED_CANCELLED, None)
            raise

    async def _open(self) -> None:
        if self._state is not StreamState.AWAITING_HEADER:
            return
        self._started = time.perf_counter()
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start")
        self._response = await self._token.race(
            self._transport.open_stream(self._body),
            discard=StreamedResponse.aclose,
        )
        status = self._response.status_code
        if not 200 <= status <= 299:
            body = await self._token.race(self._response.harvest_lines(ERROR_BODY_HARVEST_LINES))
            message = _harvest_message(body) or describe_status(status, self._response.reason)
            raise ServerError(status, message)
        self._lines = self._response.lines()
        self._state = StreamState.STREAMING

    async def _read_line(self) -> Optional[str]:
        assert self._lines is not None  # nosec B101 - set by _open
        try:
            return await self._lines.__anext__()
        except StopAsyncIteration:
            return None

    async def _next_chunk(self) -> Optional[CompletionChunk]:
        await self._open()
        while True:
            line = await self._token.race(self._read_line())
            if line is None:
                await self._finish(StreamState.TERMINATED_OK, None)
                return None
            parsed = parse_sse_line(line)
            if parsed.kind is SSELineKind.IGNORED:
                continue
            if parsed.kind is SSELineKind.DONE:
                await self._finish(StreamState.TERMINATED_OK, None)
                return None
            try:
                chunk = decode_chunk(parsed.payload or "")
            except StreamError as exc:
                normalized_log_event(
                    self._logger,
                    "stream.decode_error",
                    self._ctx,
                    phase="stream",
                    error_code=exc.code.value,
                    error=exc.message,
                    emitted=self._metrics.emitted > 0,
                )
                raise
            self._record(chunk)
            return chunk

    def _record(self, chunk: CompletionChunk) -> None:
        self._metrics.emitted += 1
        if self._metrics.time_to_first_token_ms is None and self._started is not None:
            self._metrics.time_to_first_token_ms = (time.perf_counter() - self._started) * 1000.0
        if chunk.usage is not None:
            self._usage = chunk.usage
            apply_usage(self._metrics, chunk.usage)

    async def _finish(self, state: StreamState, error: Optional[BaseException]) -> None:
        if self._state.terminal:
            return
        self._state = state
        self._error = error
        try:
            if self._lines is not None:
                await self._lines.aclose()
            if self._response is not None:
                await self._response.aclose()
        finally:
            self._log_finalize()

    def _log_finalize(self) -> None:
        if self._started is not None:
            self._metrics.total_duration_ms = (time.perf_counter() - self._started) * 1000.0
        error_code: Optional[str] = None
        if self._error is not None:
            error_code = classify_exception(self._error).value
        elif self._state is StreamState.TERMINATED_CANCELLED:
            error_code = ErrorCode.CANCELLED.value
        normalized_log_event(
            self._logger,
            "stream.finalize",
            self._ctx,
            phase="finalize",
            emitted=self._metrics.emitted > 0,
            tokens=self._metrics.tokens,
            error_code=error_code,
            state=self._state.value,
            emitted_count=self._metrics.emitted,
            time_to_first_token_ms=self._metrics.time_to_first_token_ms,
            total_duration_ms=self._metrics.total_duration_ms,
            error=str(self._error) if self._error is not None else None,
        )


__all__ = ["ChatStream"]
