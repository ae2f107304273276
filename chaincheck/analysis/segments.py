"""Partitioning of call sequences into chain segments."""

from dataclasses import dataclass
from typing import Optional

from ..knowledge import KnowledgeBase
from ..models import CallSite

TERMINAL_CALL = "send"


@dataclass(frozen=True)
class ChainSegment:
    """One relevant call plus the argument-setting calls chained onto it."""

    anchor: CallSite
    calls: tuple[CallSite, ...]  # window, anchor first
    terminal: Optional[CallSite] = None

    @property
    def argument_names(self) -> frozenset[str]:
        return frozenset(call.method_name for call in self.calls)

    @property
    def size(self) -> int:
        """Number of calls consumed from the sequence."""
        return len(self.calls) + (1 if self.terminal is not None else 0)


def skip_irrelevant(calls: list[CallSite], kb: KnowledgeBase) -> list[CallSite]:
    """Drop leading calls whose name is not in the knowledge base."""
    for i, call in enumerate(calls):
        if call.method_name in kb:
            return calls[i:]
    return []


def take_segment(
    calls: list[CallSite],
    kb: KnowledgeBase,
    terminal: str = TERMINAL_CALL,
) -> ChainSegment:
    """Cut the segment anchored at ``calls[0]``.

    The window extends while calls repeat the anchor's name or are unknown to
    the knowledge base. It stops before the next distinct relevant call, or at
    the terminal call, which is consumed but not part of the window. The
    anchor is always consumed.
    """
    anchor = calls[0]
    window = [anchor]
    terminal_call = None
    for call in calls[1:]:
        name = call.method_name
        if name == terminal:
            terminal_call = call
            break
        if name != anchor.method_name and name in kb:
            break
        window.append(call)
    return ChainSegment(anchor=anchor, calls=tuple(window), terminal=terminal_call)


def iter_segments(
    calls: list[CallSite],
    kb: KnowledgeBase,
    terminal: str = TERMINAL_CALL,
):
    """Yield segments of a call list that is already in source order."""
    remaining = skip_irrelevant(calls, kb)
    while remaining:
        segment = take_segment(remaining, kb, terminal)
        yield segment
        remaining = skip_irrelevant(remaining[segment.size:], kb)
