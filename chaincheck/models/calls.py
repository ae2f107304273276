"""Call site and client hint models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, order=True)
class SourceLocation:
    """Position of a call in a source file (1-based line and column)."""

    path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class CallSite:
    """A single method call found in a function body."""

    method_name: str
    receiver: Optional[str] = None  # unset for subscripts, call results, literals
    location: Optional[SourceLocation] = None


@dataclass(frozen=True)
class ClientHint:
    """Syntactic clue about which service a client binding talks to.

    At least one of ``binding`` and ``service`` is always set.
    """

    binding: Optional[str] = None
    service: Optional[str] = None

    def __post_init__(self):
        if self.binding is None and self.service is None:
            raise ValueError("ClientHint needs a binding name or a service")

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.binding or "", self.service or "")
