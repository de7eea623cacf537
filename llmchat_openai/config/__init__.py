"""Unified configuration layer for the chat client.

Goals
-----
* Centralize defaults (endpoint pairs per provider preset).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults for the selected provider preset
    2. Optional external config file (JSON or YAML) named by LLMCHAT_CONFIG_FILE
    3. Environment variables
    4. In-code overrides passed to the helper (``None`` values ignored)
* Provide a single call site: ``get_client_config(overrides)``.

Environment Variables
---------------------
LLMCHAT_API_KEY (falls back to OPENAI_API_KEY), LLMCHAT_ENDPOINT,
LLMCHAT_MODELS_ENDPOINT, LLMCHAT_FALLBACK (1/0, true/false, yes/no),
LLMCHAT_PROVIDER (openai | openrouter | groq).

External Config File
--------------------
Parsed as JSON first and as YAML otherwise. Example:

```
provider: openrouter
api_key: sk-or-...
fallback: true
headers:
  HTTP-Referer: https://example.invalid
```

An unreadable or malformed file is logged and ignored.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..base.logging import get_logger, log_event
from .defaults import DEFAULT_PROVIDER, PROVIDER_PRESETS
from .env import (
    CONFIG_FILE_ENV,
    ENV_FIELD_MAP,
    PROVIDER_ENV,
    is_placeholder,
    parse_bool,
    resolve_api_key,
)

_logger = get_logger("llmchat.config")


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the external config file (``path`` or ``$LLMCHAT_CONFIG_FILE``)."""
    path = path or os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        log_event(_logger, "config.file_missing", path=str(p))
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            log_event(_logger, "config.file_invalid", path=str(p), error=str(exc))
            return {}
    if not isinstance(data, dict):
        log_event(_logger, "config.file_invalid", path=str(p), error="top-level value is not a mapping")
        return {}
    return data


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if not val:
            continue
        if field == "fallback":
            flag = parse_bool(val)
            if flag is not None:
                out[field] = flag
        else:
            out[field] = val
    key, _ = resolve_api_key()
    if key:
        out["api_key"] = key
    if provider := os.getenv(PROVIDER_ENV):
        out["provider"] = provider
    return out


def _coerce_fallback(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    flag = parse_bool(str(value))
    if flag is None:
        raise ValueError(f"invalid fallback flag: {value!r} (expected true/false, yes/no, on/off or 1/0)")
    return flag


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Keys: ``provider``, ``endpoint``, ``models_endpoint`` and, when set
    anywhere, ``api_key``, ``fallback`` and ``headers``.

    Raises:
        ValueError: the selected provider preset is unknown or
            ``fallback`` is not a recognizable boolean.
    """
    explicit = {k: v for k, v in (overrides or {}).items() if v is not None}
    file_cfg = load_config_file()
    env_cfg = _env_overrides()

    provider = str(
        explicit.get("provider") or env_cfg.get("provider") or file_cfg.get("provider") or DEFAULT_PROVIDER
    ).lower().strip()
    if provider not in PROVIDER_PRESETS:
        raise ValueError(f"unknown provider preset: {provider!r} (expected one of {sorted(PROVIDER_PRESETS)})")

    cfg: Dict[str, Any] = dict(PROVIDER_PRESETS[provider])
    cfg |= file_cfg
    cfg |= env_cfg
    cfg |= explicit
    if "fallback" in cfg:
        cfg["fallback"] = _coerce_fallback(cfg["fallback"])
    cfg["provider"] = provider
    return cfg


__all__ = [
    "get_client_config",
    "load_config_file",
    "is_placeholder",
]
