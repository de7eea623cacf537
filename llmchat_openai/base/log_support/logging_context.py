"""Structured logging context carried by client log events."""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Common fields of a request's log events.

    ``model`` is the selector label (comma-joined for fallback lists) and
    ``endpoint`` the target URL; the API key is never part of the context.
    """

    model: Optional[str] = None
    endpoint: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
