"""Output formatting module."""

from .messages import (
    format_finding,
    missing_message,
    ambiguous_message,
    unit_diagnostics,
)
from .console import (
    print_diagnostics,
    print_summary,
    print_lookup,
    print_services,
)
from .document import (
    check_result_to_dict,
    diagnostic_to_dict,
    lookup_to_dict,
    print_json,
)

__all__ = [
    "print_json",
    "format_finding",
    "missing_message",
    "ambiguous_message",
    "unit_diagnostics",
    "print_diagnostics",
    "print_summary",
    "print_lookup",
    "print_services",
    "check_result_to_dict",
    "diagnostic_to_dict",
    "lookup_to_dict",
]
