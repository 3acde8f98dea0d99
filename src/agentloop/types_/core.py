"""Message and wire types exchanged with the model.

Messages form a tagged union over ``role``. They are frozen once constructed,
so a conversation can share message objects between copies without risk of
one copy editing another's history.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

logger = logging.getLogger(__name__)

Role = Literal["assistant", "function", "system", "user"]


class FunctionCall(BaseModel):
    """A function request attached to an assistant message.

    ``arguments`` is kept as the raw serialized payload the model produced;
    it is only parsed when the call is dispatched.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="The name of the requested function.", min_length=1)
    arguments: str = Field(description="The serialized arguments for the function.")


class FunctionDefinition(BaseModel):
    """Wire form of a function offered to the model.

    The input schema is carried as ``parameters``, the key OpenAI-compatible
    APIs expect in a function definition.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, Any] = Field(description="JSON schema describing the function input.")


class Message(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    role: Role = Field(description="The role of the message author.")
    content: str | None = Field(default=None, description="The contents of the message.")


class SystemMessage(Message):
    role: Literal["system"] = "system"
    content: str = Field(description="The contents of the message.", min_length=1)


class UserMessage(Message):
    role: Literal["user"] = "user"
    content: str = Field(description="The contents of the message.", min_length=1)


class AssistantMessage(Message):
    role: Literal["assistant"] = "assistant"
    content: str | None = Field(default=None, description="The contents of the message.")
    function_call: FunctionCall | None = Field(default=None, description="A request to run a function.")


class FunctionResultMessage(Message):
    role: Literal["function"] = "function"
    name: str = Field(description="The name of the function that produced this result.", min_length=1)
    content: str = Field(description="The serialized output of the function.")


ChatMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, FunctionResultMessage],
    Field(discriminator="role"),
]

_chat_message_adapter: TypeAdapter[ChatMessage] = TypeAdapter(ChatMessage)


def parse_message(data: Mapping[str, Any] | Message) -> Message:
    """Validate a mapping into the message class matching its ``role``."""
    if isinstance(data, Message):
        return data
    return _chat_message_adapter.validate_python(data)
