"""Fallback routing capability detection.

Some aggregators accept an ordered ``models`` list together with
``route: "fallback"`` and try each model in turn. Plain OpenAI-compatible
servers reject that shape, so the request builder must know whether the
configured endpoint supports it.

The decision comes from, in order:

1. an explicit boolean supplied when the client is constructed;
2. the endpoint host matched against an allow-list (``FALLBACK_HOSTS``),
   exact match or any sub-domain of an allowed host, case-insensitive.
"""
from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import urlsplit

FALLBACK_HOSTS: frozenset[str] = frozenset({"openrouter.ai"})


def supports_fallback(host: Optional[str], allowed_hosts: Iterable[str] = FALLBACK_HOSTS) -> bool:
    """Return True when ``host`` is (a sub-domain of) an allowed host."""
    if not host:
        return False
    name = host.lower().rstrip(".")
    for allowed in allowed_hosts:
        allowed = allowed.lower()
        if name == allowed or name.endswith("." + allowed):
            return True
    return False


def resolve_fallback(
    endpoint_url: str,
    override: Optional[bool] = None,
    allowed_hosts: Iterable[str] = FALLBACK_HOSTS,
) -> bool:
    """Decide fallback capability for ``endpoint_url``.

    ``override`` wins when not ``None``; otherwise the URL host is checked
    against ``allowed_hosts``.
    """
    if override is not None:
        return override
    return supports_fallback(urlsplit(endpoint_url).hostname, allowed_hosts)


__all__ = ["FALLBACK_HOSTS", "supports_fallback", "resolve_fallback"]
