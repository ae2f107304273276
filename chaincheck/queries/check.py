"""Source checking queries."""

import ast
import logging
from pathlib import Path
from typing import Iterable, Optional

from ..analysis import analyze_unit, find_units
from ..config import CheckSettings
from ..models import CheckResult, FileReport
from .base import Query

logger = logging.getLogger(__name__)


class CheckQuery(Query[FileReport]):
    """Check every analysis unit in one module's source."""

    def execute(
        self,
        source: str,
        path: str = "<string>",
        settings: Optional[CheckSettings] = None,
    ) -> FileReport:
        """Execute the check.

        Args:
            source: Python source code.
            path: File name used in locations.
            settings: Analysis settings (defaults when omitted).

        Returns:
            FileReport with one UnitReport per analyzed function.

        Raises:
            SyntaxError: If the source does not parse.
        """
        settings = settings or CheckSettings()
        tree = ast.parse(source, filename=path)
        lines = source.splitlines()
        units = find_units(
            tree,
            path,
            decorator=settings.decorator,
            all_functions=settings.check_all_functions,
        )
        logger.debug(f"{path}: {len(units)} unit(s) to analyze")
        return FileReport(
            path=path,
            units=[analyze_unit(unit, self.kb, settings, source_lines=lines) for unit in units],
        )


def collect_python_files(paths: Iterable[str | Path]) -> list[Path]:
    """Expand directories into their ``*.py`` files, sorted, without duplicates."""
    files: list[Path] = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*.py") if p.is_file()))
        else:
            files.append(path)
    return list(dict.fromkeys(files))


class CheckPathsQuery(Query[CheckResult]):
    """Check a set of files and directories."""

    def execute(
        self,
        paths: Iterable[str | Path],
        settings: Optional[CheckSettings] = None,
    ) -> CheckResult:
        """Check each Python file found under ``paths``.

        Raises:
            OSError: If a file can't be read.
            SyntaxError: If a file does not parse.
        """
        check = CheckQuery(self.kb)
        result = CheckResult()
        for file in collect_python_files(paths):
            source = file.read_text(encoding="utf-8")
            result.files.append(check.execute(source, path=str(file), settings=settings))
        return result
