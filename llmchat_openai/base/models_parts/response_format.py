"""Structured output format selector and predicted-output hint."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Union


@dataclass(frozen=True)
class ResponseFormat:
    """Requested response format: ``text``, ``json_object`` or ``json_schema``."""

    type: str
    name: Optional[str] = None
    schema: Optional[Mapping[str, Any]] = None
    description: Optional[str] = None
    strict: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.type not in ("text", "json_object", "json_schema"):
            raise ValueError(f"unknown response format type: {self.type!r}")
        if self.type == "json_schema" and (not self.name or self.schema is None):
            raise ValueError("json_schema response format requires a name and a schema")

    @classmethod
    def text(cls) -> "ResponseFormat":
        return cls("text")

    @classmethod
    def json_object(cls) -> "ResponseFormat":
        return cls("json_object")

    @classmethod
    def json_schema(
        cls,
        name: str,
        schema: Mapping[str, Any],
        *,
        description: Optional[str] = None,
        strict: Optional[bool] = None,
    ) -> "ResponseFormat":
        return cls("json_schema", name=name, schema=schema, description=description, strict=strict)

    def to_wire(self) -> Dict[str, Any]:
        if self.type != "json_schema":
            return {"type": self.type}
        body: Dict[str, Any] = {"name": self.name, "schema": dict(self.schema or {})}
        if self.description is not None:
            body["description"] = self.description
        if self.strict is not None:
            body["strict"] = self.strict
        return {"type": "json_schema", "json_schema": body}


@dataclass(frozen=True)
class Prediction:
    """Predicted output: text the model is expected to largely reproduce.

    ``content`` is a single string or a sequence of text segments.
    """

    content: Union[str, Sequence[str]]

    def to_wire(self) -> Dict[str, Any]:
        if isinstance(self.content, str):
            value: Any = self.content
        else:
            value = [{"type": "text", "text": t} for t in self.content]
        return {"type": "content", "content": value}


__all__ = ["ResponseFormat", "Prediction"]
