"""Discovery of the functions to analyze in a module."""

import ast
from dataclasses import dataclass
from typing import Optional

from ..models import SourceLocation
from .attributes import DECORATOR_NAME, find_marker

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


@dataclass
class AnalysisUnit:
    """A function selected for analysis."""

    name: str
    node: FunctionNode
    location: SourceLocation
    marker: Optional[ast.expr] = None


class _UnitFinder(ast.NodeVisitor):
    def __init__(self, path: str, decorator: str, all_functions: bool):
        self.path = path
        self.decorator = decorator
        self.all_functions = all_functions
        self.scope: list[str] = []
        self.units: list[AnalysisUnit] = []

    def visit_ClassDef(self, node: ast.ClassDef):
        self.scope.append(node.name)
        self.generic_visit(node)
        self.scope.pop()

    def _visit_function(self, node: FunctionNode):
        marker = find_marker(node, self.decorator)
        if marker is not None or self.all_functions:
            anchor = marker if marker is not None else node
            self.units.append(AnalysisUnit(
                name=".".join([*self.scope, node.name]),
                node=node,
                location=SourceLocation(self.path, anchor.lineno, anchor.col_offset + 1),
                marker=marker,
            ))
            # nested functions are covered by this unit
            return
        self.scope.append(node.name)
        for statement in node.body:
            self.visit(statement)
        self.scope.pop()

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function


def find_units(
    tree: ast.Module,
    path: str = "<string>",
    decorator: str = DECORATOR_NAME,
    all_functions: bool = False,
) -> list[AnalysisUnit]:
    """Return marked functions (or every function) in source order."""
    finder = _UnitFinder(path, decorator, all_functions)
    finder.visit(tree)
    return finder.units
