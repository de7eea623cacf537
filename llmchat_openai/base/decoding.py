"""
Buffered response decoding.

Classification order for a complete response body:

1. A JSON error envelope ``{"error": {"message": ...}}`` raises
   ``ServerError(status, message)``, even when the status is 2xx.
2. A status outside 200-299 raises ``ServerError`` whose message is
   ``"HTTP <status> <reason>"`` followed by the body text when present.
3. The body is validated into the target model; any JSON or schema failure
   raises ``DecodingError``.
"""
from __future__ import annotations

from typing import Optional, Type, TypeVar

import pydantic

from .errors import DecodingError, ServerError, describe_status, extract_error_message
from .models import Completion, ModelList

M = TypeVar("M", bound=pydantic.BaseModel)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def raise_for_error(status_code: int, content: bytes, reason: Optional[str] = None) -> None:
    """Raise ``ServerError`` for an error envelope or a non-2xx status."""
    message = extract_error_message(content)
    if message is not None:
        raise ServerError(status_code, message)
    if not _is_success(status_code):
        raise ServerError(status_code, describe_status(status_code, reason, content))


def _decode(model: Type[M], status_code: int, content: bytes, reason: Optional[str]) -> M:
    raise_for_error(status_code, content, reason)
    try:
        return model.model_validate_json(content)
    except pydantic.ValidationError as exc:
        raise DecodingError(exc) from exc


def decode_completion(status_code: int, content: bytes, reason: Optional[str] = None) -> Completion:
    """Decode a buffered chat completion response."""
    return _decode(Completion, status_code, content, reason)


def decode_model_list(status_code: int, content: bytes, reason: Optional[str] = None) -> ModelList:
    """Decode a ``GET /models`` response."""
    return _decode(ModelList, status_code, content, reason)


__all__ = ["raise_for_error", "decode_completion", "decode_model_list"]
