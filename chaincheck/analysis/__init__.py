"""Static analysis of builder call chains."""

from .analyzer import analyze_unit, unit_services
from .attributes import DECORATOR_NAME, find_marker, parse_services
from .clients import infer_clients
from .heuristics import DEFAULT_HEURISTICS, ServiceHeuristic, StripClientHeuristic, guess_service
from .recorder import CallRecorder, record_calls
from .resolution import Resolution, ResolutionEngine
from .segments import TERMINAL_CALL, ChainSegment, iter_segments, take_segment
from .units import AnalysisUnit, find_units

__all__ = [
    "analyze_unit",
    "unit_services",
    "DECORATOR_NAME",
    "find_marker",
    "parse_services",
    "infer_clients",
    "DEFAULT_HEURISTICS",
    "ServiceHeuristic",
    "StripClientHeuristic",
    "guess_service",
    "CallRecorder",
    "record_calls",
    "Resolution",
    "ResolutionEngine",
    "TERMINAL_CALL",
    "ChainSegment",
    "iter_segments",
    "take_segment",
    "AnalysisUnit",
    "find_units",
]
