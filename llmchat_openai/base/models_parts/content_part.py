"""
Outbound message content parts.

This module defines the closed set of parts a chat message may carry: plain
text and image references. Encoding dispatches exhaustively over the known
part types; an unknown object raises ``TypeError`` rather than being dropped
from the request.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple, Union


class ImageDetail(str, Enum):
    """Fidelity hint sent with an image part."""

    HIGH = "high"
    LOW = "low"
    AUTO = "auto"


@dataclass(frozen=True)
class TextPart:
    """A plain text segment of a message."""

    text: str


@dataclass(frozen=True)
class ImagePart:
    """An image reference (HTTP URL or ``data:`` URL) with a detail hint."""

    url: str
    detail: ImageDetail = ImageDetail.AUTO


ContentPart = Union[TextPart, ImagePart]


def encode_content_part(part: ContentPart) -> Dict[str, Any]:
    """Return the wire object for a single content part."""
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}
    if isinstance(part, ImagePart):
        return {
            "type": "image_url",
            "image_url": {"url": part.url, "detail": ImageDetail(part.detail).value},
        }
    raise TypeError(f"unsupported content part: {type(part).__name__}")


def decode_content_parts(wire: Union[str, Sequence[Dict[str, Any]]]) -> Tuple[ContentPart, ...]:
    """Recover content parts from an encoded ``content`` value.

    A bare string decodes to a single :class:`TextPart`; a list decodes
    element by element. Unknown part types raise ``ValueError``.
    """
    if isinstance(wire, str):
        return (TextPart(wire),)
    parts: List[ContentPart] = []
    for item in wire:
        kind = item.get("type")
        if kind == "text":
            parts.append(TextPart(item["text"]))
        elif kind == "image_url":
            image = item["image_url"]
            parts.append(ImagePart(image["url"], ImageDetail(image.get("detail", ImageDetail.AUTO.value))))
        else:
            raise ValueError(f"unknown content part type: {kind!r}")
    return tuple(parts)


__all__ = [
    "ImageDetail",
    "TextPart",
    "ImagePart",
    "ContentPart",
    "encode_content_part",
    "decode_content_parts",
]
