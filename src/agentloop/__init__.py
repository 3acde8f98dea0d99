"""Bounded agent loop for function-calling chat models."""

from importlib.metadata import PackageNotFoundError, version
import logging

from .core import (
    Agent,
    AgentConfig,
    AgentFunction,
    AgentLoopError,
    ArgumentParseError,
    BuiltContext,
    ClientFunction,
    ClientOptions,
    Context,
    DuplicateFunctionError,
    FunctionDisabledError,
    FunctionExecutionError,
    FunctionRegistry,
    MessageNotFoundError,
    OpenAIClientFunction,
    RunStep,
    Signal,
    UnknownFunctionError,
    ValidationError,
    agent_function,
    serialize_output,
)
from .types_.core import (
    AssistantMessage,
    ChatMessage,
    FunctionCall,
    FunctionDefinition,
    FunctionResultMessage,
    Message,
    SystemMessage,
    UserMessage,
    parse_message,
)

try:
    __version__ = version("agentloop")
except PackageNotFoundError:
    __version__ = "0.0.0"

# add nullhandler to prevent a default configuration being used if the calling application doesn't set one
logging.getLogger("agentloop").addHandler(logging.NullHandler())

__all__ = [
    # Agent loop
    "Agent",
    "AgentConfig",
    "RunStep",
    # State
    "BuiltContext",
    "Context",
    "FunctionRegistry",
    # Functions
    "AgentFunction",
    "agent_function",
    "serialize_output",
    # Client
    "ClientFunction",
    "ClientOptions",
    "OpenAIClientFunction",
    "Signal",
    # Messages
    "AssistantMessage",
    "ChatMessage",
    "FunctionCall",
    "FunctionDefinition",
    "FunctionResultMessage",
    "Message",
    "SystemMessage",
    "UserMessage",
    "parse_message",
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
