"""Client inference from function signatures and local declarations."""

import ast
from typing import Optional

from ..models import ClientHint
from .paths import dotted_path

CLIENT_MARKER = "Client"
SDK_PREFIX = "aws_sdk_"

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


def _all_parameters(args: ast.arguments) -> list[ast.arg]:
    params = [*args.posonlyargs, *args.args, *args.kwonlyargs]
    if args.vararg is not None:
        params.append(args.vararg)
    if args.kwarg is not None:
        params.append(args.kwarg)
    return params


def hint_from_parameter(
    param: ast.arg,
    marker: str = CLIENT_MARKER,
    sdk_prefix: str = SDK_PREFIX,
) -> Optional[ClientHint]:
    """Hint for a parameter annotated with a path ending in the client marker.

    ``sqs_client: aws_sdk_sqs.Client`` -> binding ``sqs_client``, service ``sqs``.
    ``client: Client`` -> binding ``client``, no service.
    """
    if param.annotation is None:
        return None
    segments = dotted_path(param.annotation)
    if not segments or segments[-1] != marker:
        return None

    service = None
    if len(segments) > 1 and segments[-2].startswith(sdk_prefix):
        service = segments[-2][len(sdk_prefix):] or None
    return ClientHint(binding=param.arg, service=service)


def _binding_name(target: ast.AST) -> Optional[str]:
    if isinstance(target, ast.Name):
        return target.id
    elif isinstance(target, ast.Attribute):
        # self.client = ... binds "client", matching how receivers are read
        return target.attr
    return None


def hint_from_declaration(
    target: ast.AST,
    value: Optional[ast.AST],
    marker: str = CLIENT_MARKER,
    sdk_prefix: str = SDK_PREFIX,
) -> Optional[ClientHint]:
    """Hint for ``target = <call>`` where the callee path contains the client marker.

    ``sqs = aws_sdk_sqs.Client.new(config)`` -> binding ``sqs``, service ``sqs``.
    ``client = Client.from_conf(conf)`` -> binding ``client``, no service.
    ``client = await aws_sdk_sqs.Client.create(cfg)`` is read through the ``await``.
    """
    if isinstance(value, ast.Await):
        value = value.value
    if not isinstance(value, ast.Call):
        return None
    segments = dotted_path(value.func)
    if not segments or marker not in segments:
        return None

    service = next(
        (s.replace(sdk_prefix, "") for s in segments if sdk_prefix in s),
        None,
    ) or None
    binding = _binding_name(target)
    if binding is None and service is None:
        return None
    return ClientHint(binding=binding, service=service)


class _DeclarationVisitor(ast.NodeVisitor):
    def __init__(self, marker: str, sdk_prefix: str):
        self.marker = marker
        self.sdk_prefix = sdk_prefix
        self.hints: set[ClientHint] = set()

    def _add(self, hint: Optional[ClientHint]):
        if hint is not None:
            self.hints.add(hint)

    def visit_Assign(self, node: ast.Assign):
        for target in node.targets:
            self._add(hint_from_declaration(target, node.value, self.marker, self.sdk_prefix))
        self.generic_visit(node)

    def visit_AnnAssign(self, node: ast.AnnAssign):
        self._add(hint_from_declaration(node.target, node.value, self.marker, self.sdk_prefix))
        self.generic_visit(node)


def infer_clients(
    func: FunctionNode,
    marker: str = CLIENT_MARKER,
    sdk_prefix: str = SDK_PREFIX,
) -> frozenset[ClientHint]:
    """Collect client hints from a function's parameters and its local declarations.

    Declarations inside nested functions and lambdas of the body are included.
    Duplicate hints collapse.
    """
    hints: set[ClientHint] = set()
    for param in _all_parameters(func.args):
        hint = hint_from_parameter(param, marker, sdk_prefix)
        if hint is not None:
            hints.add(hint)

    visitor = _DeclarationVisitor(marker, sdk_prefix)
    for statement in func.body:
        visitor.visit(statement)
    hints.update(visitor.hints)
    return frozenset(hints)
