"""Immutable method -> service -> required arguments table."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Optional


def _unique(names: Iterable[str]) -> tuple[str, ...]:
    seen: list[str] = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return tuple(seen)


class KnowledgeBase:
    """Read-only lookup of required arguments per (method, service).

    Built once per analysis run and passed explicitly to every component.
    Services under a method are stored in sorted order so that iteration
    is deterministic.
    """

    def __init__(
        self,
        methods: Mapping[str, Mapping[str, Iterable[str]]],
        source: Optional[str] = None,
    ):
        self.source = source or "<memory>"
        frozen: dict[str, Mapping[str, tuple[str, ...]]] = {}
        for method, services in methods.items():
            frozen[method] = MappingProxyType(
                {service: _unique(args) for service, args in sorted(services.items())}
            )
        self._methods: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(frozen)
        self._service_names = tuple(
            sorted({service for services in frozen.values() for service in services})
        )

    def __contains__(self, method: object) -> bool:
        return method in self._methods

    def __len__(self) -> int:
        return len(self._methods)

    def __repr__(self) -> str:
        return f"KnowledgeBase(source={self.source!r}, methods={len(self)})"

    def requirements_for(self, method: str) -> Mapping[str, tuple[str, ...]]:
        """Return service -> required arguments for a method.

        Raises:
            KeyError: If the method is not in the table.
        """
        return self._methods[method]

    def get(self, method: str) -> Optional[Mapping[str, tuple[str, ...]]]:
        return self._methods.get(method)

    def service_names(self) -> tuple[str, ...]:
        """All services mentioned anywhere in the table, sorted."""
        return self._service_names

    def unknown_services(self, names: Iterable[str]) -> list[str]:
        """Return the names that no method in the table belongs to."""
        known = set(self._service_names)
        return [name for name in names if name not in known]

    def to_dict(self) -> dict[str, dict[str, list[str]]]:
        return {
            method: {service: list(args) for service, args in services.items()}
            for method, services in self._methods.items()
        }
