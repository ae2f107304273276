"""User-facing messages for findings."""

from ..models import (
    AmbiguousService,
    Diagnostic,
    Finding,
    MissingArguments,
    UnitReport,
)

COMMA_WITH_SPACE = ", "
MAX_LISTED_SERVICES = 5


def missing_message(finding: MissingArguments) -> str:
    return (
        f"method `{finding.method}` (from {finding.service}) is missing required "
        f"argument(s): {COMMA_WITH_SPACE.join(finding.missing)}"
    )


def ambiguous_message(finding: AmbiguousService, decorator: str = "required_props") -> str:
    services = sorted(finding.candidates)
    if len(services) <= MAX_LISTED_SERVICES:
        shown = COMMA_WITH_SPACE.join(services)
    else:
        shown = f"{COMMA_WITH_SPACE.join(services[:MAX_LISTED_SERVICES])}... (abbreviated list)"
    example = services[0] if services else "sqs"
    return (
        f"method `{finding.method}` is used in multiple services: {shown}. "
        f"Specify the intended service explicitly, e.g. `@{decorator}(services=\"{example}\")`"
    )


def format_finding(finding: Finding, decorator: str = "required_props") -> str:
    if isinstance(finding, MissingArguments):
        return missing_message(finding)
    elif isinstance(finding, AmbiguousService):
        return ambiguous_message(finding, decorator)
    else:
        raise TypeError(f"not a finding: {finding!r}")


def finding_kind(finding: Finding) -> str:
    return "missing" if isinstance(finding, MissingArguments) else "ambiguous"


def unit_diagnostics(unit: UnitReport, decorator: str = "required_props") -> list[Diagnostic]:
    """One diagnostic per finding, or the configuration error alone."""
    if unit.configuration_error is not None:
        return [Diagnostic(unit.location, unit.configuration_error, "configuration")]
    return [
        Diagnostic(f.location, format_finding(f, decorator), finding_kind(f))
        for f in unit.findings
    ]
