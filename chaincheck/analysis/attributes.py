"""Marker decorator lookup and argument parsing."""

import ast
from typing import Optional

from ..exceptions import AttributeArgumentError
from .paths import dotted_path

DECORATOR_NAME = "required_props"

_ONLY_SERVICES = "the only allowed argument is `services`"
_EXPECTED_SERVICES = (
    "expected one or more services after `services`, "
    'e.g. `services="sqs"` or `services="sqs,s3"`'
)


def find_marker(func: ast.FunctionDef | ast.AsyncFunctionDef, name: str = DECORATOR_NAME) -> Optional[ast.expr]:
    """Return the marker decorator of a function, if it has one.

    Matches ``@name``, ``@name(...)`` and dotted forms such as ``@pkg.name``.
    """
    for decorator in func.decorator_list:
        target = decorator.func if isinstance(decorator, ast.Call) else decorator
        segments = dotted_path(target)
        if segments and segments[-1] == name:
            return decorator
    return None


def _split_names(value: ast.expr) -> list[str]:
    if isinstance(value, ast.Constant) and isinstance(value.value, str):
        return [part.strip() for part in value.value.split(",")]
    elif isinstance(value, (ast.List, ast.Tuple)):
        names = []
        for element in value.elts:
            if not (isinstance(element, ast.Constant) and isinstance(element.value, str)):
                raise AttributeArgumentError(_EXPECTED_SERVICES)
            names.append(element.value.strip())
        return names
    else:
        raise AttributeArgumentError(_EXPECTED_SERVICES)


def parse_services(decorator: ast.expr) -> list[str]:
    """Read the ``services`` hint from a marker decorator.

    ``@required_props`` and ``@required_props()`` mean no hint.

    Raises:
        AttributeArgumentError: For positional or unknown keyword arguments,
            and for a ``services`` value that names no valid service.
    """
    if not isinstance(decorator, ast.Call):
        return []
    if decorator.args:
        raise AttributeArgumentError(_ONLY_SERVICES)

    services: list[str] = []
    for keyword in decorator.keywords:
        if keyword.arg != "services":
            raise AttributeArgumentError(_ONLY_SERVICES)
        names = _split_names(keyword.value)
        if not names or any(not n.isidentifier() for n in names):
            raise AttributeArgumentError(_EXPECTED_SERVICES)
        services.extend(names)
    return services
