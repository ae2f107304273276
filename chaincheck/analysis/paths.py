"""Helpers for reading dotted paths out of expressions."""

import ast
from typing import Optional


def dotted_path(node: ast.AST) -> Optional[list[str]]:
    """Return the segments of a dotted name, e.g. ``a.b.C`` -> ``["a", "b", "C"]``.

    String annotations are parsed and handled the same way. Any other
    expression shape (subscripts, calls, ...) yields None.
    """
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        try:
            parsed = ast.parse(node.value.strip(), mode="eval")
        except SyntaxError:
            return None
        return dotted_path(parsed.body)

    segments: list[str] = []
    while isinstance(node, ast.Attribute):
        segments.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return None
    segments.append(node.id)
    segments.reverse()
    return segments
