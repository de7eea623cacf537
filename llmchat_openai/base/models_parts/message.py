"""
Outbound chat message model.

Defines the immutable `ChatMessage` and the `Role` enumeration. Content is
normalized at construction: a plain string becomes a single text part and any
sequence becomes a tuple, so a message never changes after it is built.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from .content_part import ContentPart, TextPart, encode_content_part


class Role(str, Enum):
    """Author role of a chat message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, init=False)
class ChatMessage:
    """A single message of a chat conversation.

    Attributes:
        role: Author role.
        content: Ordered tuple of content parts.
        name: Optional participant name; omitted from the wire when ``None``.

    Serialization:
        ``content`` is written as a bare string when the message holds exactly
        one text part and as a list of typed part objects otherwise.
    """

    role: Role
    content: Tuple[ContentPart, ...]
    name: Optional[str]

    def __init__(
        self,
        role: Union[Role, str],
        content: Union[str, Sequence[ContentPart]],
        name: Optional[str] = None,
    ) -> None:
        parts: Tuple[ContentPart, ...]
        if isinstance(content, str):
            parts = (TextPart(content),)
        else:
            parts = tuple(content)
        object.__setattr__(self, "role", Role(role))
        object.__setattr__(self, "content", parts)
        object.__setattr__(self, "name", name)

    @classmethod
    def system(cls, content: Union[str, Sequence[ContentPart]], name: Optional[str] = None) -> "ChatMessage":
        return cls(Role.SYSTEM, content, name)

    @classmethod
    def user(cls, content: Union[str, Sequence[ContentPart]], name: Optional[str] = None) -> "ChatMessage":
        return cls(Role.USER, content, name)

    @classmethod
    def assistant(cls, content: Union[str, Sequence[ContentPart]], name: Optional[str] = None) -> "ChatMessage":
        return cls(Role.ASSISTANT, content, name)

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-serializable wire object for this message."""
        wire: Dict[str, Any] = {"role": self.role.value}
        if len(self.content) == 1 and isinstance(self.content[0], TextPart):
            wire["content"] = self.content[0].text
        else:
            wire["content"] = [encode_content_part(p) for p in self.content]
        if self.name is not None:
            wire["name"] = self.name
        return wire


__all__ = [
    "ChatMessage",
    "Role",
]
