"""Resolution of call chains against the knowledge base.

For every chain segment the engine decides which service's requirements
apply, then diffs the required arguments against the calls chained onto
the anchor. Resolution rules, first unique answer wins:

a. the method exists for exactly one service;
b. every service requires the same arguments (the label joins all names);
c. services declared on the unit intersect the candidates;
d. the receiver's name matches a candidate;
e. a client hint (service, or guessed from its binding) matches a candidate;
f. otherwise the call is ambiguous.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable, Optional

from ..knowledge import KnowledgeBase
from ..models import (
    AmbiguousService,
    CallSite,
    ClientHint,
    Finding,
    MissingArguments,
)
from .heuristics import DEFAULT_HEURISTICS, ServiceHeuristic, guess_service
from .segments import TERMINAL_CALL, ChainSegment, iter_segments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Service whose requirements apply to one segment."""

    service: str  # informational label, may join several names
    required: tuple[str, ...]


class ResolutionEngine:
    """Turns a recorded call list into findings for one function."""

    def __init__(
        self,
        kb: KnowledgeBase,
        clients: Iterable[ClientHint] = (),
        selected_services: Iterable[str] = (),
        terminal: str = TERMINAL_CALL,
        heuristics: tuple[ServiceHeuristic, ...] = DEFAULT_HEURISTICS,
        stop_on_ambiguity: bool = True,
    ):
        self.kb = kb
        self.clients = tuple(sorted(set(clients), key=lambda c: c.sort_key))
        self.selected_services = list(dict.fromkeys(selected_services))
        self.terminal = terminal
        self.heuristics = heuristics
        self.stop_on_ambiguity = stop_on_ambiguity
        self._client_bindings = {c.binding for c in self.clients if c.binding is not None}

    def find_findings(self, recorded: list[CallSite]) -> list[Finding]:
        """Analyze calls in recording order and return findings in source order."""
        findings: list[Finding] = []
        for segment in iter_segments(list(reversed(recorded)), self.kb, self.terminal):
            anchor = segment.anchor
            if not self.is_relevant(anchor):
                logger.debug(f"Skipping {anchor.method_name} on unknown receiver {anchor.receiver}")
                continue

            candidates = self._candidates(anchor)
            resolution = self.resolve(anchor, candidates)
            if resolution is None:
                findings.append(AmbiguousService(
                    method=anchor.method_name,
                    candidates=tuple(sorted(candidates)),
                    location=anchor.location,
                ))
                if self.stop_on_ambiguity:
                    break
                continue

            finding = self.check_segment(segment, resolution)
            if finding is not None:
                findings.append(finding)
        return findings

    def is_relevant(self, anchor: CallSite) -> bool:
        """False when known clients exist but none is bound to the anchor's receiver."""
        if anchor.receiver is None or not self.clients:
            return True
        return anchor.receiver in self._client_bindings

    def _candidates(self, anchor: CallSite) -> Mapping[str, tuple[str, ...]]:
        candidates = self.kb.get(anchor.method_name)
        if not candidates:
            raise AssertionError(
                f"anchor {anchor.method_name!r} was segmented but has no knowledge base entry"
            )
        return candidates

    def resolve(
        self,
        anchor: CallSite,
        candidates: Mapping[str, tuple[str, ...]],
    ) -> Optional[Resolution]:
        """Pick the service for an anchor, or None when it cannot be determined."""
        names = sorted(candidates)

        if len(names) == 1:
            return Resolution(names[0], candidates[names[0]])

        distinct = {candidates[name] for name in names}
        if len(distinct) == 1:
            return Resolution(",".join(names), candidates[names[0]])

        service = (
            self._from_selected_services(anchor, names)
            or guess_service(anchor.receiver, names, self.heuristics)
            or self._from_client_hints(anchor, names)
        )
        if service is None:
            return None
        return Resolution(service, candidates[service])

    def _from_selected_services(self, anchor: CallSite, names: list[str]) -> Optional[str]:
        matching = [s for s in self.selected_services if s in names]
        if not matching:
            return None
        if len(matching) == 1:
            return matching[0]
        guessed = guess_service(anchor.receiver, matching, self.heuristics)
        return guessed or matching[0]

    def _client_service(self, client: ClientHint, names: list[str]) -> Optional[str]:
        if client.service is not None and client.service in names:
            return client.service
        return guess_service(client.binding, names, self.heuristics)

    def _from_client_hints(self, anchor: CallSite, names: list[str]) -> Optional[str]:
        matches: list[tuple[ClientHint, str]] = []
        for client in self.clients:
            service = self._client_service(client, names)
            if service is not None:
                matches.append((client, service))

        if not matches:
            return None
        if len(matches) == 1:
            return matches[0][1]
        for client, service in matches:
            if anchor.receiver is not None and client.binding == anchor.receiver:
                return service
        return matches[-1][1]

    def check_segment(self, segment: ChainSegment, resolution: Resolution) -> Optional[MissingArguments]:
        seen = segment.argument_names
        missing = tuple(arg for arg in resolution.required if arg not in seen)
        if not missing:
            return None
        return MissingArguments(
            method=segment.anchor.method_name,
            service=resolution.service,
            missing=missing,
            location=segment.anchor.location,
        )
