"""Functions the model may call.

An AgentFunction pairs an implementation with an input schema. Input is
validated before every call; the validator is compiled on first use and
cached for the life of the function.
"""

from __future__ import annotations

from functools import cached_property
import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError, to_json

from .exceptions import FunctionExecutionError, ValidationError
from .schema import signature_model
from ..types_.core import FunctionDefinition

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

AgentFn = Callable[[InputT], Union[Awaitable[OutputT], OutputT]]


def serialize_output(value: Any) -> str:
    """Serialize a function's output into message content.

    Strings are returned unchanged; everything else is encoded as compact JSON,
    including models, dataclasses and datetimes nested in containers.
    """
    if isinstance(value, str):
        return value
    try:
        return to_json(value).decode()
    except PydanticSerializationError as e:
        logger.warning(f"JSON serialization failed: {e}")
        return str(value)


class AgentFunction(Generic[InputT, OutputT]):
    """A function that can be called by the agent.

    Parameters
    ----------
    name : str
        Unique name the model uses to request the function.
    description : str
        Description offered to the model.
    schema : type
        Input type; anything pydantic can validate against (a BaseModel subclass,
        TypedDict, dataclass, ...). Its JSON schema is sent to the model.
    fn : Callable
        Implementation. Receives the validated input and may be sync or async.
    """

    def __init__(
        self,
        name: str,
        description: str,
        schema: type[InputT] | Any,
        fn: AgentFn[InputT, OutputT],
    ) -> None:
        if not name:
            raise ValueError("Function name must be a non-empty string")
        self.name = name
        self.description = description
        self.schema = schema
        self._fn = fn

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    @cached_property
    def _validator(self) -> TypeAdapter[InputT]:
        logger.debug(f"Compiling input validator for function '{self.name}'")
        return TypeAdapter(self.schema)

    @property
    def parameters(self) -> dict[str, Any]:
        """JSON schema of the function input."""
        return self._validator.json_schema()

    def definition(self) -> FunctionDefinition:
        """Return the wire definition offered to the model."""
        return FunctionDefinition(name=self.name, description=self.description, parameters=self.parameters)

    def validate(self, value: Any) -> InputT:
        """Validate (and coerce) input against the schema.

        **Note**: ``run`` calls this automatically.

        Raises
        ------
        ValidationError
            If the input does not match the schema; ``errors`` lists each violation.
        """
        try:
            return self._validator.validate_python(value)
        except PydanticValidationError as e:
            raise ValidationError(e.errors(include_url=False), name=self.name) from e

    async def run(self, value: Any) -> OutputT:
        """Validate the input and run the implementation.

        Raises
        ------
        ValidationError
            If the input is invalid.
        FunctionExecutionError
            If the implementation raises; the original exception is kept as ``cause``.
        """
        validated = self.validate(value)

        try:
            result = self._fn(validated)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            raise FunctionExecutionError(self.name, e) from e
        return result

    @classmethod
    def from_callable(
        cls,
        func: Callable[..., Any],
        name: str | None = None,
        description: str | None = None,
    ) -> AgentFunction[BaseModel, Any]:
        """Wrap a plain python function, deriving the schema from its signature.

        The model's arguments are validated against a model built from the type
        hints, then passed to ``func`` as keyword arguments. The docstring
        provides the description unless one is given.
        """
        model = signature_model(func, name=name)
        if description is None:
            if inspect.getdoc(func) is None:
                logger.warning(f"Function {func.__name__} requires a docstring for a useful description.")
            description = model.__doc__ or ""

        def call(params: BaseModel) -> Any:
            return func(**{field: getattr(params, field) for field in type(params).model_fields})

        return cls(name or func.__name__, description, model, call)


def agent_function(
    func: Callable[..., Any] | None = None,
    *,
    name: str | None = None,
    description: str | None = None,
) -> Any:
    """Decorate a function into an AgentFunction.

    Can be used either as a bare decorator (``@agent_function``) or with
    parameters (``@agent_function(name="lookup")``).

    Examples
    --------
    >>> @agent_function
    ... def add(x: int, y: int) -> int:
    ...     '''Add two numbers.'''
    ...     return x + y
    >>> add.name
    'add'
    """

    def decorator(f: Callable[..., Any]) -> AgentFunction[BaseModel, Any]:
        return AgentFunction.from_callable(f, name=name, description=description)

    if func is not None:
        return decorator(func)
    return decorator
