"""Required-argument lookup query."""

from ..models import LookupResult
from .base import Query


class LookupQuery(Query[LookupResult]):
    """Show which services define a method and what each requires."""

    def execute(self, method: str) -> LookupResult:
        requirements = self.kb.get(method) or {}
        return LookupResult(method=method, requirements=dict(requirements))
