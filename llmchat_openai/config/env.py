"""llmchat_openai.config.env
=========================

Environment variable names and small helpers for reading them.

Failure Modes
-------------
Helpers never raise on unset or malformed variables; they return ``None`` and
let the configuration layer fall back to the next source.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

CONFIG_FILE_ENV = "LLMCHAT_CONFIG_FILE"
PROVIDER_ENV = "LLMCHAT_PROVIDER"

# Config field -> env var.
ENV_FIELD_MAP: Dict[str, str] = {
    "endpoint": "LLMCHAT_ENDPOINT",
    "models_endpoint": "LLMCHAT_MODELS_ENDPOINT",
    "fallback": "LLMCHAT_FALLBACK",
}

# API key env vars in priority order.
API_KEY_ENV_CANDIDATES: Tuple[str, ...] = ("LLMCHAT_API_KEY", "OPENAI_API_KEY")

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test credential.

    Heuristics (case-insensitive): contains ``placeholder``, ``changeme`` or
    ``example``, or starts with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def parse_bool(raw: Optional[str]) -> Optional[bool]:
    """Parse a boolean flag; unknown or empty values give ``None``."""
    if raw is None:
        return None
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return None


def resolve_api_key() -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty API key variable."""
    for name in API_KEY_ENV_CANDIDATES:
        if val := os.environ.get(name):
            return val, name
    return None, None


__all__ = [
    "CONFIG_FILE_ENV",
    "PROVIDER_ENV",
    "ENV_FIELD_MAP",
    "API_KEY_ENV_CANDIDATES",
    "is_placeholder",
    "parse_bool",
    "resolve_api_key",
]
