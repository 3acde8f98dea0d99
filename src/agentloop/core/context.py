"""Conversation state for an agent run.

A Context holds the ordered messages of a conversation and the registry of
functions the model may call. The agent loop appends to it as a run progresses.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict
from typing_extensions import Self

from .exceptions import MessageNotFoundError
from .function import AgentFunction
from .registry import FunctionRegistry
from ..types_.core import FunctionDefinition, Message, SystemMessage, UserMessage

logger = logging.getLogger(__name__)


class BuiltContext(BaseModel):
    """Snapshot of a context in the shape the model call expects."""

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...]
    functions: list[FunctionDefinition]


class Context:
    """Store the messages and functions of a conversation.

    Parameters
    ----------
    messages : Iterable[Message], optional
        Initial messages, oldest first.
    functions : FunctionRegistry, optional
        Registry of callable functions; a new empty registry by default.
    """

    def __init__(
        self,
        messages: Iterable[Message] | None = None,
        functions: FunctionRegistry | None = None,
    ) -> None:
        self._messages: list[Message] = list(messages or ())
        self._functions = functions if functions is not None else FunctionRegistry()

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(messages={len(self._messages)}, functions={self._functions!r})"

    @property
    def messages(self) -> tuple[Message, ...]:
        """The messages in the context, oldest first."""
        return tuple(self._messages)

    @property
    def functions(self) -> FunctionRegistry:
        return self._functions

    def add_message(self, message: Message) -> Self:
        self._messages.append(message)
        return self

    def add_system(self, content: str) -> Self:
        """Append a system message."""
        return self.add_message(SystemMessage(content=content))

    def add_user(self, content: str) -> Self:
        """Append a user message."""
        return self.add_message(UserMessage(content=content))

    def add_function(self, fn: AgentFunction[Any, Any], enabled: bool = True) -> Self:
        """Register a function with the context's registry.

        Raises
        ------
        DuplicateFunctionError
            If a function with the same name already exists.
        """
        self._functions.register(fn, enabled=enabled)
        return self

    def replace_message(self, original: Message, replacement: Message) -> None:
        """Swap ``original`` for ``replacement`` in place.

        ``original`` is matched by identity, not equality, so an equal but distinct
        message elsewhere in the history is never touched.

        Raises
        ------
        MessageNotFoundError
            If ``original`` is not in the context.
        """
        for idx, message in enumerate(self._messages):
            if message is original:
                self._messages[idx] = replacement
                return
        raise MessageNotFoundError(original)

    def build(self) -> BuiltContext:
        """Build the payload for the model call."""
        return BuiltContext(messages=self.messages, functions=self._functions.build_definitions())

    def duplicate(self) -> Context:
        """Copy the context.

        The copy has its own message list (holding the same message objects) and a
        duplicated registry, so appending or toggling functions on one does not
        affect the other.
        """
        return Context(self._messages, self._functions.duplicate())
