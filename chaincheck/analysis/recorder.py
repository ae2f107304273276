"""Call recording over a function body."""

import ast
from typing import Optional

from ..models import CallSite, SourceLocation


def receiver_binding(receiver: ast.expr) -> Optional[str]:
    """Name the receiver of a method call, when it has a statically known name.

    - ``client.m()`` -> ``client``
    - ``self.client.m()`` / ``obj.client.m()`` -> ``client``
    - ``clients[0].m()``, ``make().m()``, ``"x".m()`` -> None
    """
    if isinstance(receiver, ast.Name):
        return receiver.id
    elif isinstance(receiver, ast.Attribute):
        return receiver.attr
    else:
        return None


def method_location(
    func: ast.Attribute,
    path: str,
    line_text: Optional[str] = None,
) -> SourceLocation:
    """Location of the method name itself (1-based), not of the receiver.

    ``ast`` reports columns as UTF-8 byte offsets. When the text of the line
    is known the column is converted to characters.
    """
    line = func.end_lineno or func.lineno
    end_col = func.end_col_offset if func.end_col_offset is not None else func.col_offset
    if line_text is not None:
        end_col = len(line_text.encode("utf-8")[:end_col].decode("utf-8", errors="ignore"))
    return SourceLocation(path=path, line=line, column=max(end_col - len(func.attr), 0) + 1)


class CallRecorder(ast.NodeVisitor):
    """Records method calls in mirrored pre-order.

    Each call is recorded before its children. The callee, and with it the
    receiver chain, is visited first and the arguments after it, so a chain
    stays contiguous in the record even when a setter argument holds another
    chain. For ``a.m1().m2(b.n()).m3()`` the record is ``m3, m2, m1, n`` and
    the reversed record is ``n, m1, m2, m3``.
    """

    def __init__(self, path: str = "<string>", source_lines: Optional[list[str]] = None):
        self.path = path
        self.source_lines = source_lines
        self.calls: list[CallSite] = []

    def _line_text(self, func: ast.Attribute) -> Optional[str]:
        if self.source_lines is None:
            return None
        index = (func.end_lineno or func.lineno) - 1
        if 0 <= index < len(self.source_lines):
            return self.source_lines[index]
        return None

    def visit_Call(self, node: ast.Call):
        func = node.func
        if isinstance(func, ast.Attribute):
            self.calls.append(CallSite(
                method_name=func.attr,
                receiver=receiver_binding(func.value),
                location=method_location(func, self.path, self._line_text(func)),
            ))
        self.visit(func)
        for child in reversed([*node.args, *node.keywords]):
            self.visit(child)

    def generic_visit(self, node: ast.AST):
        for child in reversed(list(ast.iter_child_nodes(node))):
            self.visit(child)


def record_calls(
    body: list[ast.stmt],
    path: str = "<string>",
    source_lines: Optional[list[str]] = None,
) -> list[CallSite]:
    """Record every method call in a list of statements.

    Nested expressions, lambdas, comprehensions and nested functions are
    entered as well. Statements are walked last-to-first.
    """
    recorder = CallRecorder(path, source_lines)
    for statement in reversed(body):
        recorder.visit(statement)
    return recorder.calls
