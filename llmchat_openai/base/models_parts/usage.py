"""
Token usage reported by the server.

All fields are optional: compatible providers omit different subsets, and a
streamed response only carries usage on its final chunk.
"""
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class CompletionTokensDetails(BaseModel):
    """Breakdown of completion tokens."""

    model_config = ConfigDict(extra="ignore")

    reasoning_tokens: Optional[int] = None
    accepted_prediction_tokens: Optional[int] = None
    rejected_prediction_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None


class PromptTokensDetails(BaseModel):
    """Breakdown of prompt tokens."""

    model_config = ConfigDict(extra="ignore")

    cached_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None


class Usage(BaseModel):
    """Token accounting for a completion."""

    model_config = ConfigDict(extra="ignore")

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    completion_tokens_details: Optional[CompletionTokensDetails] = None
    prompt_tokens_details: Optional[PromptTokensDetails] = None

    def as_token_mapping(self) -> Dict[str, Optional[int]]:
        """Return the ``{"prompt", "completion", "total"}`` mapping used in logs."""
        return {
            "prompt": self.prompt_tokens,
            "completion": self.completion_tokens,
            "total": self.total_tokens,
        }


__all__ = ["Usage", "CompletionTokensDetails", "PromptTokensDetails"]
