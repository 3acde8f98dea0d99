import json

from openai.types.chat.chat_completion import (
    ChatCompletion as OpenAIChatCompletion,
    Choice as OpenAIChatCompletionChoice,
)
from openai.types.chat.chat_completion_message import ChatCompletionMessage as OpenAIChatCompletionMessage
import pytest

from agentloop.types_.core import AssistantMessage, FunctionCall
from agentloop.types_.openai_compat import ChatCompletion, convert_response


@pytest.fixture
def tool_calls():
    return [
        {"id": "call_1", "type": "function", "function": {"name": "add1", "arguments": json.dumps({"x": 1})}},
        {"id": "call_2", "type": "function", "function": {"name": "add2", "arguments": json.dumps({"x": 1, "y": 2})}},
    ]


def completion_dict(message: dict, finish_reason: str = "stop") -> dict:
    return {"id": "test123", "choices": [{"finish_reason": finish_reason, "message": message}]}


def test_openai_content_completion():
    completion = OpenAIChatCompletion(
        id="test123",
        created=1234567,
        model="openai:gpt-fake",
        object="chat.completion",
        choices=[
            OpenAIChatCompletionChoice(
                finish_reason="stop",
                index=0,
                message=OpenAIChatCompletionMessage(role="assistant", content="raindrops on roses"),
            )
        ],
    )

    message = convert_response(completion)

    assert isinstance(message, AssistantMessage)
    assert message.content == "raindrops on roses"
    assert message.function_call is None


def test_dict_function_call_completion():
    message = convert_response(
        completion_dict(
            {"role": "assistant", "content": None, "function_call": {"name": "add1", "arguments": '{"x": 1}'}},
            finish_reason="function_call",
        )
    )

    assert message.content is None
    assert message.function_call == FunctionCall(name="add1", arguments='{"x": 1}')


def test_tool_calls_use_first(tool_calls, caplog):
    message = convert_response(completion_dict({"role": "assistant", "tool_calls": tool_calls}, "tool_calls"))

    assert message.function_call == FunctionCall(name="add1", arguments=json.dumps({"x": 1}))
    assert "only the first will be processed" in caplog.text


def test_function_call_preferred_over_tool_calls(tool_calls):
    message = convert_response(
        completion_dict(
            {
                "role": "assistant",
                "function_call": {"name": "legacy", "arguments": "{}"},
                "tool_calls": tool_calls[:1],
            }
        )
    )

    assert message.function_call.name == "legacy"


def test_extra_fields_ignored():
    completion = ChatCompletion.model_validate(
        {
            "id": "x",
            "object": "chat.completion",
            "choices": [{"index": 0, "logprobs": None, "message": {"role": "assistant", "content": "hi"}}],
        }
    )
    assert completion.choices[0].message.content == "hi"


def test_no_choices():
    with pytest.raises(ValueError, match="choices"):
        convert_response({"id": "x", "choices": []})
