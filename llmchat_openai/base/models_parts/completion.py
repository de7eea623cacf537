"""
Decoded non-streaming chat completion.

Pydantic models mirroring the ``chat.completion`` object. Unknown fields are
ignored so additive server changes do not break decoding; missing required
fields (``id``, ``choices``, ...) fail validation and surface as a decoding
error.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from .usage import Usage


class FinishReason(str, Enum):
    """Why the model stopped generating."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    FUNCTION_CALL = "function_call"


class FunctionCall(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    arguments: str


class ToolCall(BaseModel):
    """A tool invocation requested by the assistant."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: str = "function"
    function: FunctionCall


class AssistantMessage(BaseModel):
    """The assistant message of a completion choice."""

    model_config = ConfigDict(extra="ignore")

    role: str = "assistant"
    content: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int
    message: AssistantMessage
    finish_reason: Optional[Union[FinishReason, str]] = None
    logprobs: Optional[Any] = None


class Completion(BaseModel):
    """A full ``chat.completion`` response."""

    model_config = ConfigDict(extra="ignore")

    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: List[Choice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None
    service_tier: Optional[str] = None

    @property
    def text(self) -> Optional[str]:
        """Content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content


__all__ = [
    "FinishReason",
    "FunctionCall",
    "ToolCall",
    "AssistantMessage",
    "Choice",
    "Completion",
]
