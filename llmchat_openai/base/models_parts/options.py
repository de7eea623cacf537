"""
Request option bag.

`ChatOptions` carries every optional generation parameter a caller may set.
Only fields that were given are serialized; an absent field never appears on
the wire as ``null``. Provider-specific parameters go in ``extra`` and are
merged verbatim, but may not shadow the request envelope or a named field.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..constants import RESERVED_ENVELOPE_KEYS
from .response_format import Prediction, ResponseFormat
from .tool import Tool, ToolChoice


@dataclass(frozen=True)
class ChatOptions:
    """Optional generation parameters for a chat completion request.

    Failure Modes:
        ``ValueError`` at construction when ``extra`` uses a reserved envelope
        key (``model``, ``models``, ``route``, ``messages``, ``stream``,
        ``stream_options``) or the wire name of a named option.
    """

    temperature: Optional[float] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    n: Optional[int] = None
    seed: Optional[int] = None
    stop: Optional[Union[str, Sequence[str]]] = None
    logit_bias: Optional[Mapping[str, int]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    user: Optional[str] = None
    service_tier: Optional[str] = None
    parallel_tool_calls: Optional[bool] = None
    store: Optional[bool] = None
    metadata: Optional[Mapping[str, str]] = None
    tools: Optional[Sequence[Tool]] = None
    tool_choice: Optional[ToolChoice] = None
    response_format: Optional[ResponseFormat] = None
    prediction: Optional[Prediction] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        named = {f.name for f in fields(self)} - {"extra"}
        clashes = sorted(k for k in self.extra if k in RESERVED_ENVELOPE_KEYS or k in named)
        if clashes:
            raise ValueError(f"extra options may not set reserved or named keys: {clashes}")
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def to_wire(self) -> Dict[str, Any]:
        """Return the flat mapping of present option fields."""
        wire: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            wire[f.name] = _encode_value(value)
        wire.update(self.extra)
        return wire


def _encode_value(value: Any) -> Any:
    if isinstance(value, (ToolChoice, ResponseFormat, Prediction, Tool)):
        return value.to_wire()
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return [_encode_value(v) for v in value]
    return value


__all__ = ["ChatOptions"]
