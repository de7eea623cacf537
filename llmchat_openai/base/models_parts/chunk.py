"""
Decoded streaming chunk (``chat.completion.chunk``).

Every delta field is optional; tool-call fragments are keyed by ``index`` and
only the first fragment of a call carries its ``id`` and function ``name``.
"""
from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .completion import FinishReason
from .usage import Usage


class DeltaFunctionCall(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    arguments: Optional[str] = None


class DeltaToolCall(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[DeltaFunctionCall] = None


class Delta(BaseModel):
    """Incremental assistant message content."""

    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    content: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[DeltaToolCall]] = None


class ChunkChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    delta: Delta
    finish_reason: Optional[Union[FinishReason, str]] = None
    logprobs: Optional[Any] = None


class CompletionChunk(BaseModel):
    """One decoded SSE ``data:`` payload."""

    model_config = ConfigDict(extra="ignore")

    id: str
    object: str = "chat.completion.chunk"
    created: int
    model: str
    choices: List[ChunkChoice] = []
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None
    service_tier: Optional[str] = None

    @property
    def text(self) -> Optional[str]:
        """Content delta of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].delta.content


__all__ = [
    "DeltaFunctionCall",
    "DeltaToolCall",
    "Delta",
    "ChunkChoice",
    "CompletionChunk",
]
