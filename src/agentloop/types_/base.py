"""Request parameters passed through to the model client untouched."""

from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import AfterValidator, ValidationError, ValidatorFunctionWrapHandler, WrapValidator
from pydantic_core import PydanticCustomError
from typing_extensions import TypeAliasType

# Keys the agent fills in itself on every model call
RESERVED_PARAMS = frozenset({"model", "functions", "function_call"})


def _as_json(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    # one error for the value, not one per union member
    try:
        return handler(value)
    except ValidationError as e:
        raise PydanticCustomError(
            "invalid_json",
            "Request parameters must be JSON-compatible, got {type_name}",
            {"type_name": type(value).__name__},
        ) from e


JSON = TypeAliasType(
    "JSON",
    Annotated[
        Union[dict[str, "JSON"], list["JSON"], str, int, float, bool, None],
        WrapValidator(_as_json),
    ],
)


def _reject_reserved(params: dict[str, Any]) -> dict[str, Any]:
    reserved = RESERVED_PARAMS.intersection(params)
    if reserved:
        raise ValueError(f"{sorted(reserved)} are set by the agent and cannot be request_params")
    return params


RequestParams = Annotated[dict[str, JSON], AfterValidator(_reject_reserved)]
