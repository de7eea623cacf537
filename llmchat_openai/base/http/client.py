"""Async HTTP client construction.

Purpose:
    Provide the single place where ``httpx.AsyncClient`` instances are
    created so timeouts derive exclusively from :func:`get_timeout_config`
    and no numeric literals leak into the transport.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Lifecycle:
    - The transport that asked for a client owns it and closes it in
      ``aclose``. Clients injected by callers are never closed by this
      package.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..timeouts import TimeoutConfig, get_timeout_config


def build_async_client(timeout: Optional[TimeoutConfig] = None) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` configured with client timeouts.

    Parameters:
        timeout: Explicit timeout configuration; defaults to
            :func:`get_timeout_config`.
    """
    cfg = timeout or get_timeout_config()
    return httpx.AsyncClient(timeout=cfg.to_httpx())


__all__ = ["build_async_client"]
