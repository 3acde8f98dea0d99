import json

import pytest

from agentloop.core.exceptions import (
    AgentLoopError,
    ArgumentParseError,
    DuplicateFunctionError,
    FunctionDisabledError,
    FunctionExecutionError,
    MessageNotFoundError,
    UnknownFunctionError,
    ValidationError,
)


@pytest.fixture
def decode_error():
    try:
        json.loads("{")
    except json.JSONDecodeError as e:
        return e


class TestHierarchy:
    @pytest.mark.parametrize(
        ("exc", "builtin"),
        [
            (UnknownFunctionError("f"), LookupError),
            (DuplicateFunctionError("f"), ValueError),
            (ValidationError([]), ValueError),
            (FunctionExecutionError("f", RuntimeError("x")), RuntimeError),
            (MessageNotFoundError(object()), LookupError),
        ],
    )
    def test_builtin_bases(self, exc, builtin):
        assert isinstance(exc, AgentLoopError)
        assert isinstance(exc, builtin)

    def test_function_disabled_is_not_lookup(self):
        exc = FunctionDisabledError("f")
        assert isinstance(exc, AgentLoopError)
        assert not isinstance(exc, LookupError)


class TestMessages:
    def test_standalone_errors_name_the_function(self):
        assert str(UnknownFunctionError("lookup")) == "Function 'lookup' does not exist."
        assert str(FunctionDisabledError("lookup")) == "Function 'lookup' is not enabled."
        assert str(DuplicateFunctionError("lookup")) == "Function 'lookup' already exists."

    def test_argument_parse_error_keeps_cause(self, decode_error):
        exc = ArgumentParseError("lookup", "{", decode_error)
        assert exc.cause is decode_error
        assert exc.arguments == "{"
        assert "lookup" in str(exc)

    def test_execution_error_keeps_cause(self):
        cause = ZeroDivisionError("division by zero")
        exc = FunctionExecutionError("divide", cause)
        assert exc.cause is cause
        assert "divide" in str(exc)
        assert "ZeroDivisionError" in str(exc)

    def test_validation_error_payload(self):
        errors = [{"type": "missing", "loc": ("n",), "msg": "Field required", "input": {}}]
        exc = ValidationError(errors, name="echo")
        assert exc.errors == errors
        assert exc.name == "echo"
        assert "echo" in str(exc)

    def test_validation_error_default_message(self):
        assert str(ValidationError([])) == "Invalid input."
