"""
Chat data model public surface.

This module re-exports the one-class-per-file implementations under
``llmchat_openai.base.models_parts``: outbound messages and options (frozen
dataclasses serialized by hand) and inbound responses (pydantic models).
"""

from .models_parts.content_part import (
    ContentPart,
    ImageDetail,
    ImagePart,
    TextPart,
    decode_content_parts,
    encode_content_part,
)
from .models_parts.message import ChatMessage, Role
from .models_parts.tool import Tool, ToolChoice, ToolFunction
from .models_parts.response_format import Prediction, ResponseFormat
from .models_parts.options import ChatOptions
from .models_parts.usage import CompletionTokensDetails, PromptTokensDetails, Usage
from .models_parts.completion import (
    AssistantMessage,
    Choice,
    Completion,
    FinishReason,
    FunctionCall,
    ToolCall,
)
from .models_parts.chunk import (
    ChunkChoice,
    CompletionChunk,
    Delta,
    DeltaFunctionCall,
    DeltaToolCall,
)
from .models_parts.model_list import ModelInfo, ModelList

__all__ = [
    "ContentPart",
    "ImageDetail",
    "ImagePart",
    "TextPart",
    "decode_content_parts",
    "encode_content_part",
    "ChatMessage",
    "Role",
    "Tool",
    "ToolChoice",
    "ToolFunction",
    "Prediction",
    "ResponseFormat",
    "ChatOptions",
    "CompletionTokensDetails",
    "PromptTokensDetails",
    "Usage",
    "AssistantMessage",
    "Choice",
    "Completion",
    "FinishReason",
    "FunctionCall",
    "ToolCall",
    "ChunkChoice",
    "CompletionChunk",
    "Delta",
    "DeltaFunctionCall",
    "DeltaToolCall",
    "ModelInfo",
    "ModelList",
]
