from typing import Optional

from pydantic import BaseModel
import pytest

from agentloop.core.schema import detect_docstring_style, parse_docstring, signature_model


class TestDocstringStyle:
    def test_google(self):
        doc = "Do a thing.\n\nArgs:\n    x: The x.\n\nReturns:\n    The thing."
        assert detect_docstring_style(doc) == "google"

    def test_numpy(self):
        doc = "Do a thing.\n\nParameters\n----------\nx : int\n    The x.\n\nReturns\n-------\nint"
        assert detect_docstring_style(doc) == "numpy"

    def test_sphinx(self):
        doc = "Do a thing.\n\n:param x: The x.\n:return: The thing."
        assert detect_docstring_style(doc) == "sphinx"

    def test_plain_defaults_to_google(self):
        assert detect_docstring_style("Just a sentence.") == "google"


class TestParseDocstring:
    def test_numpy_params(self):
        def scale(x: float, factor: float = 2.0) -> float:
            """Scale a number.

            Parameters
            ----------
            x : float
                The number to scale.
            factor : float
                The multiplier.
            """
            return x * factor

        description, params = parse_docstring(scale)
        assert description == "Scale a number."
        assert params == {"x": "The number to scale.", "factor": "The multiplier."}

    def test_no_docstring(self):
        def bare(x: int) -> int:
            return x

        assert parse_docstring(bare) == (None, {})


class TestSignatureModel:
    def test_basic_function(self):
        def sample_fn(x: int, y: str) -> None:
            """Sample."""

        model = signature_model(sample_fn)
        assert issubclass(model, BaseModel)

        schema = model.model_json_schema()
        assert schema["title"] == "sample_fn"
        assert schema["description"] == "Sample."
        assert schema["properties"]["x"]["type"] == "integer"
        assert schema["properties"]["y"]["type"] == "string"
        assert set(schema["required"]) == {"x", "y"}

    def test_custom_name(self):
        def sample_fn(x: int) -> None:
            pass

        assert signature_model(sample_fn, name="renamed").model_json_schema()["title"] == "renamed"

    def test_optional_and_defaults(self):
        def optional_fn(x: Optional[int] = None, y: str = "default") -> None:
            pass

        schema = signature_model(optional_fn).model_json_schema()
        assert "anyOf" in schema["properties"]["x"]
        assert schema["properties"]["y"]["default"] == "default"
        assert "required" not in schema

    def test_untyped_params_accept_anything(self):
        def untyped_fn(x, y=1):
            pass

        model = signature_model(untyped_fn)
        assert model(x=[1, 2]).x == [1, 2]

    def test_bound_method(self):
        class SampleClass:
            def method(self, x: int) -> None:
                pass

        schema = signature_model(SampleClass().method).model_json_schema()
        assert schema["title"] == "method"
        assert "self" not in schema["properties"]

    @pytest.mark.parametrize("variadic", ["args", "kwargs"])
    def test_variadic_rejected(self, variadic):
        def with_args(*args: int) -> None:
            pass

        def with_kwargs(**kwargs: int) -> None:
            pass

        fn = with_args if variadic == "args" else with_kwargs
        with pytest.raises(TypeError, match="Variadic"):
            signature_model(fn)
