"""Analysis of a single function."""

import logging
from typing import Optional

from ..config import CheckSettings
from ..exceptions import AttributeArgumentError, UnknownServicesError
from ..knowledge import KnowledgeBase
from ..models import UnitReport
from .attributes import parse_services
from .clients import infer_clients
from .heuristics import DEFAULT_HEURISTICS, ServiceHeuristic
from .recorder import record_calls
from .resolution import ResolutionEngine
from .units import AnalysisUnit

logger = logging.getLogger(__name__)


def unit_services(unit: AnalysisUnit, kb: KnowledgeBase) -> list[str]:
    """Services declared on the unit's marker, validated against the knowledge base.

    Raises:
        AttributeArgumentError: If the marker's arguments are malformed.
        UnknownServicesError: If a declared service is not in the knowledge base.
    """
    if unit.marker is None:
        return []
    services = parse_services(unit.marker)
    unknown = kb.unknown_services(services)
    if unknown:
        raise UnknownServicesError(unknown)
    return services


def analyze_unit(
    unit: AnalysisUnit,
    kb: KnowledgeBase,
    settings: CheckSettings,
    heuristics: tuple[ServiceHeuristic, ...] = DEFAULT_HEURISTICS,
    source_lines: Optional[list[str]] = None,
) -> UnitReport:
    """Run client inference, call recording and resolution over one function."""
    report = UnitReport(name=unit.name, location=unit.location)
    try:
        report.services = unit_services(unit, kb)
    except (AttributeArgumentError, UnknownServicesError) as e:
        report.configuration_error = str(e)
        return report

    clients = infer_clients(unit.node, settings.client_marker, settings.sdk_prefix)
    calls = record_calls(unit.node.body, unit.location.path, source_lines)
    logger.debug(f"{unit.name}: {len(clients)} client hint(s), {len(calls)} method call(s)")

    engine = ResolutionEngine(
        kb,
        clients=clients,
        selected_services=report.services,
        terminal=settings.terminal_call,
        heuristics=heuristics,
        stop_on_ambiguity=settings.stop_on_ambiguity,
    )
    report.findings = engine.find_findings(calls)
    return report
