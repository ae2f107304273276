"""Finding types produced by the resolution engine."""

from dataclasses import dataclass
from typing import Optional, Union

from .calls import SourceLocation


@dataclass(frozen=True)
class MissingArguments:
    """A call chain that does not set every required argument."""

    method: str
    service: str
    missing: tuple[str, ...]
    location: Optional[SourceLocation] = None


@dataclass(frozen=True)
class AmbiguousService:
    """A call whose service could not be determined."""

    method: str
    candidates: tuple[str, ...]  # sorted
    location: Optional[SourceLocation] = None


Finding = Union[MissingArguments, AmbiguousService]
