"""Query classes for chaincheck."""

from .base import Query
from .check import CheckQuery, CheckPathsQuery, collect_python_files
from .lookup import LookupQuery

__all__ = [
    "Query",
    "CheckQuery",
    "CheckPathsQuery",
    "collect_python_files",
    "LookupQuery",
]
