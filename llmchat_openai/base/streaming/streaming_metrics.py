"""Streaming metrics collected for one streamed response.

Emitted with the ``stream.finalize`` log event.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import Usage


@dataclass
class StreamMetrics:
    """Counters and timings for a single stream.

    ``time_to_first_token_ms`` and ``total_duration_ms`` are measured from the
    moment the request is sent.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    tokens: Optional[Dict[str, Any]] = None


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping, deriving ``total`` when possible."""
    derived_total = total
    if derived_total is None and prompt is not None and completion is not None:
        derived_total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": derived_total}


def apply_usage(metrics: StreamMetrics, usage: Usage) -> None:
    """Copy server-reported usage onto ``metrics``."""
    tokens = build_token_usage(usage.prompt_tokens, usage.completion_tokens, usage.total_tokens)
    metrics.prompt_tokens = tokens["prompt"]
    metrics.completion_tokens = tokens["completion"]
    metrics.total_tokens = tokens["total"]
    metrics.tokens = tokens


__all__ = ["StreamMetrics", "build_token_usage", "apply_usage"]
