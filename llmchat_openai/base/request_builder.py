"""
Chat completion request builder.

Purpose
-------
Turn a model selector, a message list and an option bag into the JSON request
body. The builder is pure: it performs no I/O and its output depends only on
its inputs plus the fallback decision handed in by the caller.

Envelope rules
--------------
- Exactly one of ``model`` / ``models`` is present.
- A list selector on a fallback-capable endpoint becomes ``models`` plus
  ``route: "fallback"``; elsewhere the first entry is used as ``model``
  (an empty list yields ``model: ""``).
- ``stream`` is always present; a streaming request also carries
  ``stream_options: {"include_usage": true}`` so the final chunk reports usage.
- Option fields are merged flat into the same object.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence, Union

from .constants import (
    KEY_MESSAGES,
    KEY_MODEL,
    KEY_MODELS,
    KEY_ROUTE,
    KEY_STREAM,
    KEY_STREAM_OPTIONS,
    ROUTE_FALLBACK,
)
from .models import ChatMessage, ChatOptions

ModelSelector = Union[str, Sequence[str]]


def build_payload(
    selector: ModelSelector,
    messages: Sequence[ChatMessage],
    options: Optional[ChatOptions] = None,
    *,
    stream: bool,
    fallback: bool,
) -> Dict[str, Any]:
    """Return the request body as a JSON-serializable mapping.

    Parameters
    ----------
    selector:
        One model id or an ordered list of model ids.
    messages:
        Conversation messages, serialized in order.
    options:
        Optional generation parameters.
    stream:
        Whether the response should be streamed.
    fallback:
        Whether the endpoint accepts ``models`` + ``route`` (see
        :func:`llmchat_openai.base.routing.resolve_fallback`).
    """
    payload: Dict[str, Any] = options.to_wire() if options is not None else {}
    if isinstance(selector, str):
        payload[KEY_MODEL] = selector
    else:
        models = list(selector)
        if fallback:
            payload[KEY_MODELS] = models
            payload[KEY_ROUTE] = ROUTE_FALLBACK
        else:
            payload[KEY_MODEL] = models[0] if models else ""
    payload[KEY_MESSAGES] = [m.to_wire() for m in messages]
    payload[KEY_STREAM] = stream
    if stream:
        payload[KEY_STREAM_OPTIONS] = {"include_usage": True}
    return payload


def encode_payload(payload: Dict[str, Any]) -> bytes:
    """Serialize a request body to UTF-8 JSON bytes."""
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def selector_label(selector: ModelSelector) -> str:
    """Compact model label for log context."""
    if isinstance(selector, str):
        return selector
    return ",".join(selector)


__all__ = ["ModelSelector", "build_payload", "encode_payload", "selector_label"]
