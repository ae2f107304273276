"""Data models for chaincheck."""

from .calls import SourceLocation, CallSite, ClientHint
from .findings import Finding, MissingArguments, AmbiguousService
from .results import (
    Diagnostic,
    UnitReport,
    FileReport,
    CheckResult,
    LookupResult,
)

__all__ = [
    "SourceLocation",
    "CallSite",
    "ClientHint",
    "Finding",
    "MissingArguments",
    "AmbiguousService",
    "Diagnostic",
    "UnitReport",
    "FileReport",
    "CheckResult",
    "LookupResult",
]
