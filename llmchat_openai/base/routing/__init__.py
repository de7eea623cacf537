"""Model routing helpers (fallback capability detection)."""

from .fallback import FALLBACK_HOSTS, supports_fallback, resolve_fallback

__all__ = ["FALLBACK_HOSTS", "supports_fallback", "resolve_fallback"]
