"""Core protocols for the agent loop.

The loop depends on two injected capabilities:

- a model call (:class:`ClientFunction`) that turns the conversation into the
  next assistant message;
- a cancellation signal (:class:`Signal`) that the loop polls between steps.
"""

from __future__ import annotations

import logging
from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import runtime_checkable

from ..types_.base import JSON
from ..types_.core import FunctionDefinition, Message

logger = logging.getLogger(__name__)

FunctionCallMode = Literal["auto", "none"]


class ClientOptions(BaseModel):
    """Options passed to the model call for a single round."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Model identifier.", min_length=1)
    function_call: FunctionCallMode = Field(
        default="none", description="Whether the model may request a function call."
    )
    functions: list[FunctionDefinition] | None = Field(
        default=None, description="Definitions offered to the model; None when function calling is off."
    )
    params: dict[str, JSON] = Field(default_factory=dict, description="Additional pass-through request parameters.")


@runtime_checkable
class ClientFunction(Protocol):
    """Protocol for the model call capability.

    Implementations receive the ordered conversation and the round's options,
    and return the model's reply. Failures propagate; the loop never retries.
    """

    async def __call__(self, messages: tuple[Message, ...], options: ClientOptions) -> Message:
        """Request the next message from the model.

        Parameters
        ----------
        messages : tuple[Message, ...]
            The conversation so far, oldest first.
        options : ClientOptions
            Model identifier, function-call mode and definitions for this round.

        Returns
        -------
        Message
            The model's reply, usually an AssistantMessage.
        """
        ...


@runtime_checkable
class Signal(Protocol):
    """Cancellation signal polled by the agent loop.

    ``asyncio.Event`` and ``threading.Event`` both satisfy this protocol.
    """

    def is_set(self) -> bool: ...


def is_cancelled(signal: Signal | None) -> bool:
    return signal is not None and signal.is_set()

