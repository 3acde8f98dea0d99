"""Derive input models for plain python functions.

Type hints define the fields; the docstring (google, numpy or sphinx style,
parsed with griffe) supplies the model description and per-field descriptions.

ref: https://github.com/openai/openai-agents-python/blob/8d906f88f02d30b3cf6068e5de88a5f1e4bafd82/src/agents/function_schema.py
"""

from __future__ import annotations

import contextlib
import inspect
import logging
import re
from typing import Any, Callable, Literal, Type, get_type_hints

from pydantic import BaseModel, Field, create_model

logger = logging.getLogger(__name__)

DocstringStyle = Literal["google", "numpy", "sphinx"]

_STYLE_PATTERNS: dict[DocstringStyle, list[str]] = {
    "sphinx": [r"^:param\s", r"^:type\s", r"^:return:", r"^:rtype:"],
    "numpy": [r"^Parameters\s*\n\s*-{3,}", r"^Returns\s*\n\s*-{3,}", r"^Yields\s*\n\s*-{3,}"],
    "google": [r"^(Args|Arguments):", r"^(Returns):", r"^(Raises):"],
}


def detect_docstring_style(doc: str) -> DocstringStyle:
    """Guess the docstring style by counting section markers.

    Ties resolve sphinx > numpy > google; no markers at all means google.
    """
    scores = {
        style: sum(1 for pattern in patterns if re.search(pattern, doc, re.MULTILINE))
        for style, patterns in _STYLE_PATTERNS.items()
    }
    best = max(scores.values())
    if best == 0:
        return "google"
    return next(style for style in ("sphinx", "numpy", "google") if scores[style] == best)


@contextlib.contextmanager
def _quiet_griffe():
    """Silence griffe's warnings about params without annotations in the docstring."""
    griffe_logger = logging.getLogger("griffe")
    previous = griffe_logger.getEffectiveLevel()
    griffe_logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        griffe_logger.setLevel(previous)


def parse_docstring(fn: Callable) -> tuple[str | None, dict[str, str]]:
    """Return the (description, {param: description}) pair from a function's docstring."""
    from griffe import Docstring, DocstringSectionKind

    doc = inspect.getdoc(fn)
    if not doc:
        return None, {}

    with _quiet_griffe():
        sections = Docstring(doc, lineno=1, parser=detect_docstring_style(doc)).parse()

    description = next((s.value for s in sections if s.kind == DocstringSectionKind.text), None)
    params = {
        param.name: param.description
        for section in sections
        if section.kind == DocstringSectionKind.parameters
        for param in section.value
    }
    return description, params


def signature_model(fn: Callable, name: str | None = None) -> Type[BaseModel]:
    """Build a pydantic model whose fields mirror ``fn``'s parameters.

    Raises
    ------
    TypeError
        If the function takes ``*args`` or ``**kwargs``; the model call can only
        supply named arguments.
    """
    if inspect.ismethod(fn):
        fn = fn.__func__

    description, param_docs = parse_docstring(fn)
    hints = get_type_hints(fn)

    fields: dict[str, Any] = {}
    for param_name, param in inspect.signature(fn).parameters.items():
        if param_name in ("self", "cls"):
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            raise TypeError(f"Variadic parameter '{param_name}' is not supported for function '{fn.__name__}'")

        annotation = hints.get(param_name, Any)
        default = ... if param.default is inspect.Parameter.empty else param.default
        fields[param_name] = (annotation, Field(default, description=param_docs.get(param_name)))

    return create_model(
        name or fn.__name__,
        __doc__=description,
        __base__=BaseModel,
        **fields,
    )
