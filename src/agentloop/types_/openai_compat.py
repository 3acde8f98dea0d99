from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel

from .core import AssistantMessage, FunctionCall

logger = logging.getLogger(__name__)


# OpenAI compatibility
class ChatCompletionMessageFunctionCall(BaseModel, extra="ignore"):
    name: str
    arguments: str


class ChatCompletionMessageToolCall(BaseModel, extra="ignore"):
    id: str | None = None
    function: ChatCompletionMessageFunctionCall
    type: Literal["function"] = "function"


class ChatCompletionMessage(BaseModel, extra="ignore"):
    role: Literal["assistant"] = "assistant"
    content: str | None = None
    function_call: ChatCompletionMessageFunctionCall | None = None
    tool_calls: list[ChatCompletionMessageToolCall] | None = None
    refusal: str | None = None


class ChatCompletionChoice(BaseModel, extra="ignore"):
    finish_reason: Literal["stop", "length", "tool_calls", "content_filter", "function_call"] | None = None
    message: ChatCompletionMessage


class ChatCompletion(BaseModel, extra="ignore"):
    id: int | str | None = None
    choices: list[ChatCompletionChoice]


def convert_response(response: Any) -> AssistantMessage:
    """Convert an OpenAI-style chat completion into an AssistantMessage.

    Accepts SDK response objects (anything with ``model_dump``) or plain dicts.
    Only the first choice is used.
    """
    data = response.model_dump() if hasattr(response, "model_dump") else response
    completion = ChatCompletion.model_validate(data)
    if not completion.choices:
        raise ValueError("Response did not contain any choices")

    msg = completion.choices[0].message

    call = msg.function_call
    if call is None and msg.tool_calls:
        if len(msg.tool_calls) > 1:
            logger.warning("Received multiple tool calls, only the first will be processed")
        call = msg.tool_calls[0].function

    return AssistantMessage(
        content=msg.content,
        function_call=FunctionCall(name=call.name, arguments=call.arguments) if call else None,
    )
