"""Shared testing utilities: canned response bodies and mock-backed clients.

Purpose:
    Keep the wire fixtures (completion JSON, SSE bodies, error envelopes) and
    the ``httpx.MockTransport`` wiring in one place so test modules stay
    focused on behavior.

Exports:
    - completion_json / chunk_json / sse_body / error_json
    - make_client(handler, **kwargs) -> ChatClient
    - Recorder: captures requests seen by a mock handler
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator, Callable, Dict, Iterable, List, Optional

import httpx

from llmchat_openai import ChatClient

TEST_ENDPOINT = "https://api.test.invalid/v1/chat/completions"
TEST_MODELS_ENDPOINT = "https://api.test.invalid/v1/models"
OPENROUTER_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with the provided message if condition is False."""
    if not condition:
        raise AssertionError(message)


def completion_json(
    content: Optional[str] = "Hello! How can I help you today?",
    *,
    model: str = "gpt-4o",
    usage: Optional[Dict[str, Any]] = None,
    finish_reason: str = "stop",
    tool_calls: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1694268190,
        "model": model,
        "system_fingerprint": "fp_44709d6fcb",
        "choices": [{"index": 0, "message": message, "logprobs": None, "finish_reason": finish_reason}],
        "usage": usage if usage is not None else {"prompt_tokens": 5, "completion_tokens": 10, "total_tokens": 15},
    }


def chunk_json(
    content: Optional[str] = None,
    *,
    role: Optional[str] = None,
    finish_reason: Optional[str] = None,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    usage: Optional[Dict[str, Any]] = None,
    with_choice: bool = True,
) -> Dict[str, Any]:
    delta: Dict[str, Any] = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls
    body: Dict[str, Any] = {
        "id": "chatcmpl-456",
        "object": "chat.completion.chunk",
        "created": 1694268190,
        "model": "gpt-4o",
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}] if with_choice else [],
    }
    if usage is not None:
        body["usage"] = usage
    return body


def error_json(message: str, *, type_: str = "invalid_request_error", code: Optional[str] = None) -> Dict[str, Any]:
    return {"error": {"message": message, "type": type_, "param": None, "code": code}}


def sse_lines(payloads: Iterable[Any], *, done: bool = True) -> List[str]:
    """Render payloads as ``data:`` lines (dicts are JSON-encoded)."""
    lines = [f"data: {json.dumps(p) if not isinstance(p, str) else p}\n\n" for p in payloads]
    if done:
        lines.append("data: [DONE]\n\n")
    return lines


def sse_body(payloads: Iterable[Any], *, done: bool = True) -> bytes:
    return "".join(sse_lines(payloads, done=done)).encode("utf-8")


async def paced_body(lines: Iterable[str], *, hang: bool = False, fail: Optional[Exception] = None) -> AsyncIterator[bytes]:
    """Async body that yields ``lines`` one by one, then hangs or fails if asked."""
    for line in lines:
        yield line.encode("utf-8")
        await asyncio.sleep(0)
    if fail is not None:
        raise fail
    if hang:
        await asyncio.Event().wait()


class Recorder:
    """Mock transport handler that records requests and replies via ``respond``."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


def make_client(
    handler: Callable[[httpx.Request], Any],
    *,
    endpoint: str = TEST_ENDPOINT,
    models_endpoint: str = TEST_MODELS_ENDPOINT,
    api_key: str = "sk-live-abc",
    **kwargs: Any,
) -> ChatClient:
    """Return a ChatClient whose HTTP traffic goes to ``handler``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChatClient(
        api_key,
        endpoint=endpoint,
        models_endpoint=models_endpoint,
        http_client=http_client,
        **kwargs,
    )
