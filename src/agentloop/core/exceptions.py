"""agentloop exception hierarchy.

All errors inherit from :class:`AgentLoopError`. Where it makes sense they also
inherit from the builtin they refine (e.g. ``UnknownFunctionError`` is a
``LookupError``) so generic handlers still catch them.

Errors that wrap an underlying failure (:class:`ArgumentParseError`,
:class:`FunctionExecutionError`) keep it on ``.cause`` and are raised
``from`` it. The others only carry the offending function's name.
"""

from __future__ import annotations

from typing import Any


class AgentLoopError(Exception):
    """Base exception for all agentloop errors."""


class UnknownFunctionError(AgentLoopError, LookupError):
    """Raised when a function name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Function '{name}' does not exist.")


class FunctionDisabledError(AgentLoopError):
    """Raised when the model requests a registered function that is not enabled."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Function '{name}' is not enabled.")


class DuplicateFunctionError(AgentLoopError, ValueError):
    """Raised when registering a function under a name that is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Function '{name}' already exists.")


class ArgumentParseError(AgentLoopError, ValueError):
    """Raised when a function request's arguments cannot be parsed."""

    def __init__(self, name: str, arguments: str, cause: Exception) -> None:
        self.name = name
        self.arguments = arguments
        self.cause = cause
        super().__init__(f"Failed to parse arguments for function '{name}': {cause}")


class ValidationError(AgentLoopError, ValueError):
    """Raised when function input fails schema validation.

    ``errors`` holds the structured list of violations reported by the validator
    (one dict per violation, with ``loc``, ``msg`` and ``type`` keys).
    """

    def __init__(self, errors: list[dict[str, Any]], name: str | None = None, message: str = "Invalid input.") -> None:
        self.errors = errors
        self.name = name
        if name:
            message = f"{message} ({len(errors)} error(s) validating input for '{name}')"
        super().__init__(message)


class FunctionExecutionError(AgentLoopError, RuntimeError):
    """Raised when a function implementation raises."""

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to run function '{name}': {cause!r}")


class MessageNotFoundError(AgentLoopError, LookupError):
    """Raised when a message to replace is not part of the conversation."""

    def __init__(self, message: Any) -> None:
        self.message = message
        super().__init__("Message not found in context.")
