"""Heuristics that guess a service from a binding name."""

from collections.abc import Collection
from typing import Optional, Protocol


class ServiceHeuristic(Protocol):
    """Guesses which of the candidate services a binding name refers to."""

    def guess(self, binding: str, candidates: Collection[str]) -> Optional[str]:
        ...


class StripClientHeuristic:
    """``sqs_client`` -> ``sqs``: drop every "client" and "_" and compare."""

    def guess(self, binding: str, candidates: Collection[str]) -> Optional[str]:
        stripped = binding.replace("client", "").replace("_", "")
        if stripped in candidates:
            return stripped
        return None


DEFAULT_HEURISTICS: tuple[ServiceHeuristic, ...] = (StripClientHeuristic(),)


def guess_service(
    binding: Optional[str],
    candidates: Collection[str],
    heuristics: tuple[ServiceHeuristic, ...] = DEFAULT_HEURISTICS,
) -> Optional[str]:
    """Return the first guess any heuristic makes, or None."""
    if not binding:
        return None
    for heuristic in heuristics:
        service = heuristic.guess(binding, candidates)
        if service is not None:
            return service
    return None
