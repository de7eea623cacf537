"""Implementation parts for :mod:`llmchat_openai.base.cancellation`."""

from .state import State
from .cancellation_token import CancellationToken

__all__ = ["State", "CancellationToken"]
