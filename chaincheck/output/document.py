"""JSON output: conversion of results into dictionaries and printing."""

import json
from typing import Any, Optional

from ..models import CheckResult, Diagnostic, LookupResult, SourceLocation
from .messages import unit_diagnostics


def _location_to_dict(location: Optional[SourceLocation]) -> Optional[dict]:
    if location is None:
        return None
    return {"file": location.path, "line": location.line, "column": location.column}


def diagnostic_to_dict(diagnostic: Diagnostic) -> dict:
    return {
        "kind": diagnostic.kind,
        "message": diagnostic.message,
        "location": _location_to_dict(diagnostic.location),
    }


def check_result_to_dict(result: CheckResult, decorator: str = "required_props") -> dict:
    """Structured form of a check run: files -> units -> diagnostics."""
    return {
        "ok": result.ok,
        "files": [
            {
                "path": report.path,
                "units": [
                    {
                        "name": unit.name,
                        "location": _location_to_dict(unit.location),
                        "services": list(unit.services),
                        "diagnostics": [
                            diagnostic_to_dict(d) for d in unit_diagnostics(unit, decorator)
                        ],
                    }
                    for unit in report.units
                ],
            }
            for report in result.files
        ],
    }


def lookup_to_dict(result: LookupResult) -> dict:
    return {
        "method": result.method,
        "services": {
            service: list(args) for service, args in sorted(result.requirements.items())
        },
    }


def print_json(data: Any):
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))
