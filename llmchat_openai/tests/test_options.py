"""Option bag serialization: absent fields omitted, helpers encode to wire shapes."""
from __future__ import annotations

import pytest

from llmchat_openai.base.models import (
    ChatOptions,
    Prediction,
    ResponseFormat,
    Tool,
    ToolChoice,
)


def test_empty_options_serialize_to_empty_mapping():
    assert ChatOptions().to_wire() == {}  # nosec B101 - pytest assert in tests


def test_only_present_fields_are_emitted():
    wire = ChatOptions(temperature=0.2, max_tokens=64, stop=["\n"]).to_wire()
    assert wire == {"temperature": 0.2, "max_tokens": 64, "stop": ["\n"]}  # nosec B101 - pytest assert in tests
    assert None not in wire.values()  # nosec B101 - pytest assert in tests


def test_tools_and_tool_choice_encoding():
    weather = Tool.define(
        "get_current_weather",
        "Get the current weather in a given location",
        {"type": "object", "properties": {"location": {"type": "string"}}, "required": ["location"]},
    )
    wire = ChatOptions(tools=[weather], tool_choice=ToolChoice.function("get_current_weather")).to_wire()
    assert wire["tools"] == [  # nosec B101 - pytest assert in tests
        {
            "type": "function",
            "function": {
                "name": "get_current_weather",
                "description": "Get the current weather in a given location",
                "parameters": {
                    "type": "object",
                    "properties": {"location": {"type": "string"}},
                    "required": ["location"],
                },
            },
        }
    ]
    assert wire["tool_choice"] == {"type": "function", "function": {"name": "get_current_weather"}}  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "choice,expected",
    [
        (ToolChoice.none(), "none"),
        (ToolChoice.auto(), "auto"),
        (ToolChoice.required(), "required"),
        (ToolChoice.parse("function:lookup"), {"type": "function", "function": {"name": "lookup"}}),
    ],
)
def test_tool_choice_variants(choice, expected):
    assert choice.to_wire() == expected  # nosec B101 - pytest assert in tests


def test_tool_choice_rejects_unknown_mode_and_missing_name():
    with pytest.raises(ValueError):
        ToolChoice("sometimes")
    with pytest.raises(ValueError):
        ToolChoice("function")


def test_response_format_variants():
    assert ResponseFormat.text().to_wire() == {"type": "text"}  # nosec B101 - pytest assert in tests
    assert ResponseFormat.json_object().to_wire() == {"type": "json_object"}  # nosec B101 - pytest assert in tests
    schema = {"type": "object", "properties": {"name": {"type": "string"}}}
    wire = ResponseFormat.json_schema("person", schema, strict=True).to_wire()
    assert wire == {  # nosec B101 - pytest assert in tests
        "type": "json_schema",
        "json_schema": {"name": "person", "schema": schema, "strict": True},
    }
    with pytest.raises(ValueError):
        ResponseFormat("json_schema")


def test_prediction_string_and_segments():
    assert Prediction("draft").to_wire() == {"type": "content", "content": "draft"}  # nosec B101 - pytest assert in tests
    assert Prediction(["a", "b"]).to_wire() == {  # nosec B101 - pytest assert in tests
        "type": "content",
        "content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}],
    }


def test_extra_fields_merge_but_cannot_shadow_envelope_or_named_keys():
    wire = ChatOptions(temperature=1.0, extra={"provider": {"sort": "price"}}).to_wire()
    assert wire["provider"] == {"sort": "price"}  # nosec B101 - pytest assert in tests
    for key in ("model", "models", "route", "messages", "stream", "stream_options", "temperature"):
        with pytest.raises(ValueError):
            ChatOptions(extra={key: "x"})


def test_extra_is_frozen_at_construction():
    caller_extra = {"provider": {"sort": "price"}}
    options = ChatOptions(extra=caller_extra)
    caller_extra["model"] = "smuggled"
    assert "model" not in options.to_wire()  # nosec B101 - pytest assert in tests
    with pytest.raises(TypeError):
        options.extra["model"] = "smuggled"  # type: ignore[index]
