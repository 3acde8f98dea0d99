"""Registry of functions available to an agent.

Functions are stored by name in registration order. A separate ordered list
tracks which names are enabled; only enabled functions are offered to the
model, in the order they were enabled.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from .exceptions import DuplicateFunctionError, FunctionDisabledError, UnknownFunctionError
from .function import AgentFunction
from ..types_.core import FunctionDefinition

logger = logging.getLogger(__name__)


class FunctionRegistry:
    """Store functions by name and track which of them are enabled.

    Examples
    --------
    >>> registry = FunctionRegistry()
    >>> registry.register(lookup)
    >>> registry.register(search, enabled=False)
    >>> [d.name for d in registry.build_definitions()]
    ['lookup']
    """

    def __init__(self, functions: Iterable[AgentFunction[Any, Any]] | None = None, enable: bool = False) -> None:
        """Create a registry.

        Parameters
        ----------
        functions : Iterable[AgentFunction], optional
            Functions to register, in order.
        enable : bool, optional
            Whether to enable the initial functions, by default False.
        """
        self._functions: dict[str, AgentFunction[Any, Any]] = {}
        self._enabled: list[str] = []

        for fn in functions or ():
            self.register(fn, enabled=enable)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(functions={self.names}, enabled={list(self._enabled)})"

    @property
    def names(self) -> list[str]:
        """Registered names, in registration order."""
        return list(self._functions)

    @property
    def enabled(self) -> tuple[str, ...]:
        """Enabled names, in the order they were enabled."""
        return tuple(self._enabled)

    def _require(self, name: str) -> AgentFunction[Any, Any]:
        try:
            return self._functions[name]
        except KeyError:
            raise UnknownFunctionError(name) from None

    def register(self, fn: AgentFunction[Any, Any], enabled: bool = True) -> None:
        """Add a function, optionally enabling it.

        Raises
        ------
        DuplicateFunctionError
            If a function with the same name is already registered.
        """
        if fn.name in self._functions:
            raise DuplicateFunctionError(fn.name)

        self._functions[fn.name] = fn
        if enabled:
            self._enabled.append(fn.name)
        logger.debug(f"Registered function '{fn.name}' (enabled={enabled})")

    def get(self, name: str) -> AgentFunction[Any, Any] | None:
        """Return the function registered under ``name``, or None."""
        return self._functions.get(name)

    def resolve(self, name: str) -> AgentFunction[Any, Any]:
        """Return the enabled function registered under ``name``.

        Raises
        ------
        UnknownFunctionError
            If no function is registered under ``name``.
        FunctionDisabledError
            If the function is registered but not enabled.
        """
        fn = self._require(name)
        if name not in self._enabled:
            raise FunctionDisabledError(name)
        return fn

    def enable(self, name: str) -> None:
        """Enable a function. Enabling an enabled function keeps its position."""
        self._require(name)
        if name not in self._enabled:
            self._enabled.append(name)

    def disable(self, name: str) -> None:
        """Disable a function. Disabling a disabled function is a no-op."""
        self._require(name)
        if name in self._enabled:
            self._enabled.remove(name)

    def is_enabled(self, name: str) -> bool:
        self._require(name)
        return name in self._enabled

    def enable_all(self) -> None:
        """Enable every function, in registration order."""
        self._enabled = list(self._functions)

    def disable_all(self) -> None:
        self._enabled = []

    def build_definitions(self) -> list[FunctionDefinition]:
        """Build the wire definitions of the enabled functions, in enable order."""
        return [self._functions[name].definition() for name in self._enabled]

    build = build_definitions

    def duplicate(self) -> FunctionRegistry:
        """Copy the registry.

        The copy shares the function instances but has its own enabled list,
        starting from this registry's current enabled names.
        """
        clone = FunctionRegistry()
        clone._functions = dict(self._functions)
        clone._enabled = list(self._enabled)
        return clone
