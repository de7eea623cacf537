"""Chat client facade.

``ChatClient`` ties the pieces together for the three public operations:

- ``send``: one buffered chat completion.
- ``stream``: a lazy :class:`ChatStream` of completion chunks.
- ``models``: the models listing of the endpoint.

A model selector is a single model id or an ordered list of ids. On an
endpoint that supports fallback routing a list is sent as ``models`` with
``route: "fallback"``; elsewhere only its first entry is used.

Configuration is fixed at construction and the client holds no per-call
state, so concurrent calls from different tasks are independent.
"""
from __future__ import annotations

import logging
import time
from typing import Awaitable, Iterable, Mapping, Optional, Sequence, TypeVar

import httpx

from .base.cancellation import CancellationToken
from .base.decoding import decode_completion, decode_model_list
from .base.errors import ChatError, classify_exception
from .base.http.transport import ChatTransport
from .base.logging import LogContext, get_logger, log_event, normalized_log_event
from .base.models import ChatMessage, ChatOptions, Completion, ModelList
from .base.request_builder import ModelSelector, build_payload, encode_payload, selector_label
from .base.routing import FALLBACK_HOSTS, resolve_fallback
from .base.streaming import ChatStream
from .base.timeouts import TimeoutConfig
from .config import get_client_config, is_placeholder
from .config.defaults import OPENAI_DEFAULT_CHAT_ENDPOINT, OPENAI_DEFAULT_MODELS_ENDPOINT

T = TypeVar("T")


async def _await_with(token: Optional[CancellationToken], awaitable: Awaitable[T]) -> T:
    if token is None:
        return await awaitable
    return await token.race(awaitable)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0


class ChatClient:
    """Async client for an OpenAI-compatible chat completion endpoint.

    Parameters:
        api_key: Bearer token.
        endpoint: Chat completions URL.
        models_endpoint: Models listing URL.
        headers: Extra request headers; override the defaults on collision.
        fallback: Force fallback routing on (True) or off (False). ``None``
            decides from the endpoint host and ``fallback_hosts``.
        fallback_hosts: Hosts known to accept ``models`` + ``route``.
        timeout: Timeouts for the HTTP client created by this instance.
        http_client: Pre-built ``httpx.AsyncClient`` (not closed by
            :meth:`aclose`).
    """

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = OPENAI_DEFAULT_CHAT_ENDPOINT,
        models_endpoint: str = OPENAI_DEFAULT_MODELS_ENDPOINT,
        headers: Optional[Mapping[str, str]] = None,
        fallback: Optional[bool] = None,
        fallback_hosts: Iterable[str] = FALLBACK_HOSTS,
        timeout: Optional[TimeoutConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._transport = ChatTransport(
            api_key,
            endpoint,
            models_endpoint,
            headers,
            timeout=timeout,
            http_client=http_client,
        )
        self._fallback = resolve_fallback(endpoint, fallback, frozenset(fallback_hosts))
        self._logger = get_logger("llmchat.client")
        self._stream_logger = get_logger("llmchat.stream")

    @classmethod
    def from_config(
        cls,
        *,
        timeout: Optional[TimeoutConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        **overrides,
    ) -> "ChatClient":
        """Build a client from :func:`llmchat_openai.config.get_client_config`.

        Raises:
            ValueError: no API key is configured anywhere.
        """
        cfg = get_client_config(overrides)
        api_key = cfg.get("api_key")
        if not api_key:
            raise ValueError("no API key configured (set LLMCHAT_API_KEY or OPENAI_API_KEY)")
        if is_placeholder(api_key):
            log_event(
                get_logger("llmchat.config"),
                "config.placeholder_key",
                level=logging.WARNING,
                provider=cfg["provider"],
            )
        return cls(
            api_key,
            endpoint=cfg["endpoint"],
            models_endpoint=cfg["models_endpoint"],
            headers=cfg.get("headers"),
            fallback=cfg.get("fallback"),
            timeout=timeout,
            http_client=http_client,
        )

    @property
    def endpoint(self) -> str:
        return self._transport.endpoint

    @property
    def models_endpoint(self) -> str:
        return self._transport.models_endpoint

    @property
    def supports_fallback(self) -> bool:
        return self._fallback

    @property
    def headers(self) -> httpx.Headers:
        return self._transport.headers

    def _body(
        self,
        model: ModelSelector,
        messages: Sequence[ChatMessage],
        options: Optional[ChatOptions],
        *,
        stream: bool,
    ) -> bytes:
        payload = build_payload(model, messages, options, stream=stream, fallback=self._fallback)
        return encode_payload(payload)

    async def send(
        self,
        model: ModelSelector,
        messages: Sequence[ChatMessage],
        options: Optional[ChatOptions] = None,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Completion:
        """Request one non-streamed completion.

        Raises:
            NetworkError, ServerError, DecodingError, ChatCancelledError
        """
        body = self._body(model, messages, options, stream=False)
        ctx = LogContext(model=selector_label(model), endpoint=self.endpoint)
        started = time.perf_counter()
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            messages=len(messages),
            fallback=self._fallback and not isinstance(model, str),
        )
        try:
            raw = await _await_with(cancellation_token, self._transport.execute_buffered(body))
            completion = decode_completion(raw.status_code, raw.content, raw.reason)
        except ChatError as exc:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                error_code=classify_exception(exc).value,
                error=str(exc),
                status_code=getattr(exc, "status_code", None),
                total_duration_ms=_elapsed_ms(started),
            )
            raise
        ctx.response_id = completion.id
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(completion.choices),
            tokens=completion.usage.as_token_mapping() if completion.usage else None,
            served_by=completion.model,
            total_duration_ms=_elapsed_ms(started),
        )
        return completion

    def stream(
        self,
        model: ModelSelector,
        messages: Sequence[ChatMessage],
        options: Optional[ChatOptions] = None,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> ChatStream:
        """Return a lazy stream of completion chunks.

        Nothing is sent until the stream is first iterated or entered with
        ``async with``. Request building errors (``ValueError``) are raised
        here.

        The connection is released when the stream terminates, on
        ``cancel()`` or ``aclose()``, when ``async with`` exits, and when an
        abandoned ``async for`` loop is finalized by the event loop.
        """
        body = self._body(model, messages, options, stream=True)
        ctx = LogContext(model=selector_label(model), endpoint=self.endpoint)
        return ChatStream(
            self._transport,
            body,
            context=ctx,
            cancellation_token=cancellation_token,
            logger=self._stream_logger,
        )

    async def models(self, *, cancellation_token: Optional[CancellationToken] = None) -> ModelList:
        """List the models advertised by the models endpoint."""
        ctx = LogContext(endpoint=self.models_endpoint)
        started = time.perf_counter()
        normalized_log_event(self._logger, "models.start", ctx, phase="start")
        try:
            raw = await _await_with(cancellation_token, self._transport.fetch_models())
            listing = decode_model_list(raw.status_code, raw.content, raw.reason)
        except ChatError as exc:
            normalized_log_event(
                self._logger,
                "models.error",
                ctx,
                phase="finalize",
                error_code=classify_exception(exc).value,
                error=str(exc),
                total_duration_ms=_elapsed_ms(started),
            )
            raise
        normalized_log_event(
            self._logger,
            "models.end",
            ctx,
            phase="finalize",
            emitted=bool(listing.data),
            count=len(listing.data),
            total_duration_ms=_elapsed_ms(started),
        )
        return listing

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "ChatClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["ChatClient"]
