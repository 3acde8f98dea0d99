"""Core components of the agent loop.

This module provides the function registry, the conversation context, and the
Agent that drives rounds of model calls and function execution against them.
"""

from .agent import Agent, AgentConfig, RunStep
from .base import ClientFunction, ClientOptions, Signal
from .client import OpenAIClientFunction
from .context import BuiltContext, Context
from .exceptions import (
    AgentLoopError,
    ArgumentParseError,
    DuplicateFunctionError,
    FunctionDisabledError,
    FunctionExecutionError,
    MessageNotFoundError,
    UnknownFunctionError,
    ValidationError,
)
from .function import AgentFunction, agent_function, serialize_output
from .registry import FunctionRegistry

__all__ = [
    # Protocols
    "ClientFunction",
    "Signal",
    # Agent
    "Agent",
    "AgentConfig",
    "ClientOptions",
    "RunStep",
    # State
    "BuiltContext",
    "Context",
    "FunctionRegistry",
    # Functions
    "AgentFunction",
    "agent_function",
    "serialize_output",
    "OpenAIClientFunction",
    # Exceptions
    "AgentLoopError",
    "ArgumentParseError",
    "DuplicateFunctionError",
    "FunctionDisabledError",
    "FunctionExecutionError",
    "MessageNotFoundError",
    "UnknownFunctionError",
    "ValidationError",
]
