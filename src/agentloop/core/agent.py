"""The agent loop.

An Agent drives rounds of "ask the model, run the requested function, append the
result" against a Context, up to a round limit:

- every round asks the model for a message, appends it and yields it;
- when that message requests a function, the function runs and its result is
  appended and yielded before the next round starts;
- the last round (and any round with no enabled functions) is issued with
  function calling turned off, so the run always ends on a plain response.

Cancellation is cooperative. The signal is checked before each model call and
again before each function call; anything already produced is still delivered.
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator

import json_repair
from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from .base import ClientFunction, ClientOptions, Signal, is_cancelled
from .context import Context
from .exceptions import ArgumentParseError
from .function import serialize_output
from ..types_.base import RequestParams
from ..types_.core import AssistantMessage, FunctionCall, FunctionResultMessage, Message, parse_message

logger = logging.getLogger(__name__)


class AgentConfig(BaseModel):
    """Configuration for an Agent. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Model identifier passed to the client.", min_length=1)
    max_rounds: PositiveInt = Field(default=5, description="Maximum number of rounds per run.")
    description: str | None = Field(default=None, description="Description of the agent.")
    request_params: RequestParams = Field(
        default_factory=dict, description="Additional parameters passed through to every model call."
    )
    repair_arguments: bool = Field(
        default=False, description="Repair malformed function arguments instead of failing to parse them."
    )


class RunStep(BaseModel):
    """A message produced by a run, with its round number."""

    model_config = ConfigDict(frozen=True)

    round: int
    message: Message
    done: bool = Field(description="True when the message is a response without a function request.")


class Agent:
    """Run a model against a Context, executing the functions it requests.

    Parameters
    ----------
    name : str
        Name of the agent.
    client : ClientFunction
        Async model call: ``(messages, options) -> Message``.
    config : AgentConfig
        Model identifier, round limit and pass-through parameters.
    """

    def __init__(self, name: str, client: ClientFunction, config: AgentConfig) -> None:
        self.name = name
        self.config = config
        self._client = client

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, model={self.config.model!r})"

    @property
    def description(self) -> str | None:
        return self.config.description

    def _client_options(
        self, context: Context, round_: int, max_rounds: int
    ) -> tuple[tuple[Message, ...], ClientOptions]:
        built = context.build()
        is_last_round = round_ >= max_rounds
        offer_functions = not is_last_round and bool(built.functions)

        options = ClientOptions(
            model=self.config.model,
            function_call="auto" if offer_functions else "none",
            functions=built.functions if offer_functions else None,
            params=self.config.request_params,
        )
        return built.messages, options

    async def run(
        self,
        context: Context,
        *,
        signal: Signal | None = None,
        max_rounds: int | None = None,
    ) -> AsyncIterator[Message]:
        """Run the agent, yielding each message as it is added to the context.

        See :meth:`run_steps` for the round semantics and errors.
        """
        async for step in self.run_steps(context, signal=signal, max_rounds=max_rounds):
            yield step.message

    async def run_steps(
        self,
        context: Context,
        *,
        signal: Signal | None = None,
        max_rounds: int | None = None,
    ) -> AsyncIterator[RunStep]:
        """Run the agent, yielding a RunStep per message added to the context.

        The model may call zero or more functions. If a function is called, its
        result is added to the context and the model is called again in the next
        round, until ``max_rounds`` is reached.

        Parameters
        ----------
        context : Context
            Conversation to run against; messages are appended to it.
        signal : Signal, optional
            Cancellation signal, checked before each model call and each function call.
        max_rounds : int, optional
            Override the configured round limit for this run.

        Raises
        ------
        UnknownFunctionError
            If the model requests a function that is not registered.
        FunctionDisabledError
            If the model requests a function that is not enabled.
        ArgumentParseError
            If the function arguments cannot be parsed.
        ValidationError
            If the function arguments do not match the function's schema.
        FunctionExecutionError
            If the function raises.
        """
        max_rounds = self.config.max_rounds if max_rounds is None else max_rounds
        if max_rounds < 1:
            raise ValueError("max_rounds must be > 0")

        for round_ in range(1, max_rounds + 1):
            if is_cancelled(signal):
                logger.debug(f"Agent '{self.name}' aborted before round {round_}")
                return

            messages, options = self._client_options(context, round_, max_rounds)
            logger.debug(
                f"Agent '{self.name}' round {round_}/{max_rounds}: "
                f"function_call={options.function_call}, functions={len(options.functions or [])}"
            )
            message = parse_message(await self._client(messages, options))
            context.add_message(message)

            function_call = message.function_call if isinstance(message, AssistantMessage) else None
            yield RunStep(round=round_, message=message, done=function_call is None)

            # check again so an abort prevents the function from running
            if is_cancelled(signal):
                logger.debug(f"Agent '{self.name}' aborted after round {round_} response")
                return

            if function_call is not None:
                result = await self._process_function_call(context, function_call)
                context.add_message(result)
                yield RunStep(round=round_, message=result, done=False)

    def _parse_arguments(self, function_call: FunctionCall) -> Any:
        try:
            if self.config.repair_arguments:
                return json_repair.loads(function_call.arguments)
            return json.loads(function_call.arguments)
        except (ValueError, RecursionError) as e:
            raise ArgumentParseError(function_call.name, function_call.arguments, e) from e

    async def _process_function_call(self, context: Context, function_call: FunctionCall) -> FunctionResultMessage:
        """Run the requested function and build its result message.

        Errors propagate unchanged; no result message is created for a failed call.
        """
        fn = context.functions.resolve(function_call.name)
        args = self._parse_arguments(function_call)

        logger.debug(f"Invoking {function_call.name} with args: {args}")
        value = await fn.run(args)

        return FunctionResultMessage(name=function_call.name, content=serialize_output(value))
