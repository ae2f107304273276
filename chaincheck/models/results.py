"""Query result types."""

from dataclasses import dataclass, field
from typing import Optional

from .calls import SourceLocation
from .findings import Finding


@dataclass
class Diagnostic:
    """A single compiler-style error attached to a source location."""

    location: Optional[SourceLocation]
    message: str
    kind: str  # "missing", "ambiguous", "configuration"

    def __str__(self) -> str:
        where = str(self.location) if self.location else "<unknown>"
        return f"{where}: error: {self.message}"


@dataclass
class UnitReport:
    """Analysis outcome for one function."""

    name: str
    location: SourceLocation
    services: list[str] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)
    configuration_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.findings and self.configuration_error is None


@dataclass
class FileReport:
    """Analysis outcome for one source file."""

    path: str
    units: list[UnitReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(unit.ok for unit in self.units)


@dataclass
class CheckResult:
    """Analysis outcome for a whole run."""

    files: list[FileReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(report.ok for report in self.files)

    @property
    def unit_count(self) -> int:
        return sum(len(report.units) for report in self.files)


@dataclass
class LookupResult:
    """Required arguments per service for one method name."""

    method: str
    requirements: dict[str, tuple[str, ...]]

    @property
    def found(self) -> bool:
        return len(self.requirements) > 0

    @property
    def unique(self) -> bool:
        return len(self.requirements) == 1
