"""Model call adapter for OpenAI-compatible chat completion APIs."""

from __future__ import annotations

import logging
from typing import Any

from openai import AsyncOpenAI

from .base import ClientFunction, ClientOptions
from ..types_.core import AssistantMessage, Message
from ..types_.openai_compat import convert_response

logger = logging.getLogger(__name__)


def request_kwargs(messages: tuple[Message, ...], options: ClientOptions) -> dict[str, Any]:
    """Build the keyword arguments for ``chat.completions.create``.

    Function definitions and the function-call mode are only sent when functions
    are offered; some providers reject ``function_call`` without ``functions``.
    """
    kwargs: dict[str, Any] = {
        **options.params,
        "model": options.model,
        "messages": [m.model_dump(exclude_none=True) for m in messages],
    }
    if options.functions:
        kwargs["functions"] = [f.model_dump() for f in options.functions]
        kwargs["function_call"] = options.function_call
    return kwargs


class OpenAIClientFunction(ClientFunction):
    """Call an ``openai.AsyncOpenAI`` client as the agent's model capability.

    Examples
    --------
    >>> agent = Agent("helper", OpenAIClientFunction(), AgentConfig(model="gpt-4o-mini"))
    """

    def __init__(self, client: AsyncOpenAI | None = None) -> None:
        self.client = client if client is not None else AsyncOpenAI()

    async def __call__(self, messages: tuple[Message, ...], options: ClientOptions) -> AssistantMessage:
        kwargs = request_kwargs(messages, options)
        logger.debug(f"Requesting completion from {options.model} with {len(kwargs['messages'])} messages")
        response = await self.client.chat.completions.create(**kwargs)
        return convert_response(response)
