"""Unified timeout configuration for the chat client.

This module centralizes the timeout values applied to every HTTP call the
client makes and converts them into an ``httpx.Timeout``. Timeouts surface to
callers as ``NetworkError`` (the underlying ``httpx.TimeoutException`` is a
transport error).

Key Components
--------------
TimeoutConfig
    Frozen dataclass of per-phase timeouts in seconds.

get_timeout_config()
    Returns a process-cached configuration, re-parsing only when one of the
    supported environment variables changes. Supported variables (all
    optional, positive floats):
        LLMCHAT_TIMEOUT_CONNECT_SECONDS
        LLMCHAT_TIMEOUT_READ_SECONDS
        LLMCHAT_TIMEOUT_WRITE_SECONDS
        LLMCHAT_TIMEOUT_POOL_SECONDS

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache, keyed by the raw env values).
3. The read timeout is per read, so it also bounds the gap between two
   streamed chunks.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx

_ENV_NAMES = (
    "LLMCHAT_TIMEOUT_CONNECT_SECONDS",
    "LLMCHAT_TIMEOUT_READ_SECONDS",
    "LLMCHAT_TIMEOUT_WRITE_SECONDS",
    "LLMCHAT_TIMEOUT_POOL_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_seconds: Establishing the TCP/TLS connection.
        read_seconds: Waiting for any single read, including the gap between
            streamed chunks.
        write_seconds: Sending the request body.
        pool_seconds: Waiting for a free connection from the pool.
    """

    connect_seconds: float = 10.0
    read_seconds: float = 60.0
    write_seconds: float = 30.0
    pool_seconds: float = 10.0

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(
            connect=self.connect_seconds,
            read=self.read_seconds,
            write=self.write_seconds,
            pool=self.pool_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_seconds=_parse_env_float("LLMCHAT_TIMEOUT_CONNECT_SECONDS", defaults.connect_seconds),
        read_seconds=_parse_env_float("LLMCHAT_TIMEOUT_READ_SECONDS", defaults.read_seconds),
        write_seconds=_parse_env_float("LLMCHAT_TIMEOUT_WRITE_SECONDS", defaults.write_seconds),
        pool_seconds=_parse_env_float("LLMCHAT_TIMEOUT_POOL_SECONDS", defaults.pool_seconds),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
