"""Fold streamed chunks into a single completion.

Per choice index, content and refusal deltas are concatenated in arrival
order. Tool-call fragments are merged by their tool-call ``index``: the first
fragment that carries ``id`` / ``name`` sets them and ``arguments`` fragments
are concatenated. The last non-null ``finish_reason`` and the last usage win.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from ..models import (
    AssistantMessage,
    Choice,
    Completion,
    CompletionChunk,
    FinishReason,
    FunctionCall,
    ToolCall,
    Usage,
)


@dataclass
class _ToolCallState:
    id: Optional[str] = None
    type: str = "function"
    name: Optional[str] = None
    arguments: List[str] = field(default_factory=list)


@dataclass
class _ChoiceState:
    role: str = "assistant"
    content: List[str] = field(default_factory=list)
    refusal: List[str] = field(default_factory=list)
    tool_calls: Dict[int, _ToolCallState] = field(default_factory=dict)
    finish_reason: Optional[Union[FinishReason, str]] = None

    def to_choice(self, index: int) -> Choice:
        calls = [
            ToolCall(
                id=tc.id or "",
                type=tc.type,
                function=FunctionCall(name=tc.name or "", arguments="".join(tc.arguments)),
            )
            for _, tc in sorted(self.tool_calls.items())
        ]
        message = AssistantMessage(
            role=self.role,
            content="".join(self.content) if self.content else None,
            refusal="".join(self.refusal) if self.refusal else None,
            tool_calls=calls or None,
        )
        return Choice(index=index, message=message, finish_reason=self.finish_reason)


def accumulate_chunks(chunks: Iterable[CompletionChunk]) -> Completion:
    """Merge ``chunks`` into a :class:`Completion`.

    An empty input yields a completion with no choices.
    """
    choices: Dict[int, _ChoiceState] = {}
    head: Optional[CompletionChunk] = None
    usage: Optional[Usage] = None
    fingerprint: Optional[str] = None
    for chunk in chunks:
        head = head or chunk
        if chunk.usage is not None:
            usage = chunk.usage
        fingerprint = chunk.system_fingerprint or fingerprint
        for choice in chunk.choices:
            state = choices.setdefault(choice.index, _ChoiceState())
            delta = choice.delta
            if delta.role:
                state.role = delta.role
            if delta.content:
                state.content.append(delta.content)
            if delta.refusal:
                state.refusal.append(delta.refusal)
            for call in delta.tool_calls or ():
                tc = state.tool_calls.setdefault(call.index, _ToolCallState())
                tc.id = tc.id or call.id
                if call.type:
                    tc.type = call.type
                if call.function is not None:
                    tc.name = tc.name or call.function.name
                    if call.function.arguments:
                        tc.arguments.append(call.function.arguments)
            if choice.finish_reason is not None:
                state.finish_reason = choice.finish_reason

    if head is None:
        return Completion(id="", created=0, model="", choices=[])
    return Completion(
        id=head.id,
        created=head.created,
        model=head.model,
        choices=[state.to_choice(index) for index, state in sorted(choices.items())],
        usage=usage,
        system_fingerprint=fingerprint,
        service_tier=head.service_tier,
    )


__all__ = ["accumulate_chunks"]
