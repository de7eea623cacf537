"""
Function-tool declarations and the tool-choice selector.

``parameters`` is an opaque JSON-schema mapping; this package does not build
or validate schemas.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union


@dataclass(frozen=True)
class ToolFunction:
    """Function signature advertised to the model."""

    name: str
    description: Optional[str] = None
    parameters: Optional[Mapping[str, Any]] = None
    strict: Optional[bool] = None

    def to_wire(self) -> Dict[str, Any]:
        wire: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            wire["description"] = self.description
        if self.parameters is not None:
            wire["parameters"] = dict(self.parameters)
        if self.strict is not None:
            wire["strict"] = self.strict
        return wire


@dataclass(frozen=True)
class Tool:
    """A tool the model may call. Only ``function`` tools exist on the wire today."""

    function: ToolFunction
    type: str = field(default="function")

    @classmethod
    def define(
        cls,
        name: str,
        description: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        strict: Optional[bool] = None,
    ) -> "Tool":
        return cls(ToolFunction(name, description, parameters, strict))

    def to_wire(self) -> Dict[str, Any]:
        return {"type": self.type, "function": self.function.to_wire()}


@dataclass(frozen=True)
class ToolChoice:
    """How the model should pick tools.

    ``mode`` is one of ``none``, ``auto``, ``required`` or ``function``; the
    last one forces a call to ``function_name``.
    """

    mode: str
    function_name: Optional[str] = None

    _MODES = ("none", "auto", "required", "function")

    def __post_init__(self) -> None:
        if self.mode not in self._MODES:
            raise ValueError(f"unknown tool choice mode: {self.mode!r}")
        if (self.mode == "function") != (self.function_name is not None):
            raise ValueError("function_name is required for, and only for, mode 'function'")

    @classmethod
    def none(cls) -> "ToolChoice":
        return cls("none")

    @classmethod
    def auto(cls) -> "ToolChoice":
        return cls("auto")

    @classmethod
    def required(cls) -> "ToolChoice":
        return cls("required")

    @classmethod
    def function(cls, name: str) -> "ToolChoice":
        return cls("function", name)

    @classmethod
    def parse(cls, value: str) -> "ToolChoice":
        """Parse ``none``, ``auto``, ``required`` or ``function:<name>``."""
        if value.startswith("function:"):
            return cls.function(value.split(":", 1)[1])
        return cls(value)

    def to_wire(self) -> Union[str, Dict[str, Any]]:
        if self.mode == "function":
            return {"type": "function", "function": {"name": self.function_name}}
        return self.mode


__all__ = ["ToolFunction", "Tool", "ToolChoice"]
