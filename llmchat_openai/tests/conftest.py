"""Pytest configuration for the client test suite.

Provides structured log capture on the shared ``llmchat`` logger (it does not
propagate to the root logger) and isolation of the configuration
environment variables.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from llmchat_openai.base.logging import get_logger

_CONFIG_ENV = (
    "LLMCHAT_API_KEY",
    "OPENAI_API_KEY",
    "LLMCHAT_ENDPOINT",
    "LLMCHAT_MODELS_ENDPOINT",
    "LLMCHAT_FALLBACK",
    "LLMCHAT_PROVIDER",
    "LLMCHAT_CONFIG_FILE",
    "LLMCHAT_LOG_LEVEL",
)


class CapturedEvents(list):
    """Captured records plus helpers to read the JSON event payloads."""

    def payloads(self) -> List[Dict[str, Any]]:
        out = []
        for record in self:
            try:
                data = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(data, dict):
                out.append(data)
        return out

    def events(self, name: str) -> List[Dict[str, Any]]:
        return [p for p in self.payloads() if p.get("event") == name]


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove client configuration variables inherited from the developer shell."""
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def log_capture() -> Iterator[CapturedEvents]:
    records = CapturedEvents()
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = records.append  # type: ignore[method-assign]
    base = get_logger()
    previous = base.level
    base.setLevel(logging.DEBUG)
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)
