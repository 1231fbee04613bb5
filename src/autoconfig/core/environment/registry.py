"""Hierarchical component registry queried by component-presence conditions.

Registries form an explicit chain: each registry holds its own components and
an optional ``parent``. Queries are restricted by a :class:`SearchScope`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, Set, runtime_checkable

from autoconfig.core.exceptions import ConfigurationError

from .types import type_id_of


class SearchScope(str, Enum):
    """Which part of a registry hierarchy a query inspects."""

    CURRENT = "current"  # only the immediate registry
    ANCESTORS = "ancestors"  # all enclosing registries, not the immediate one
    ALL = "all"

    @classmethod
    def parse(cls, value: "str | SearchScope") -> "SearchScope":
        if isinstance(value, SearchScope):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                f"Unknown search scope {value!r} (expected one of: {allowed})",
                field="search",
            ) from None


@runtime_checkable
class ComponentRegistry(Protocol):
    def find(
        self,
        type_id: Optional[str] = None,
        name: Optional[str] = None,
        scope: SearchScope = SearchScope.ALL,
    ) -> Set[str]: ...


@dataclass(frozen=True)
class ComponentDefinition:
    name: str
    types: frozenset


class ScopedComponentRegistry:
    """A registry level in a parent-linked chain."""

    def __init__(self, name: str = "root", parent: Optional["ScopedComponentRegistry"] = None) -> None:
        self.name = name
        self.parent = parent
        self._components: Dict[str, ComponentDefinition] = {}

    def child(self, name: str) -> "ScopedComponentRegistry":
        return ScopedComponentRegistry(name, parent=self)

    def register(self, name: str, types: Iterable[str] = ()) -> ComponentDefinition:
        """Register a component by name with the type identifiers it satisfies."""
        definition = ComponentDefinition(name, frozenset(str(t) for t in types))
        self._components[name] = definition
        return definition

    def register_instance(self, name: str, instance: Any) -> ComponentDefinition:
        """Register ``instance`` under every type in its class hierarchy."""
        mro = type(instance).__mro__
        return self.register(name, (type_id_of(c) for c in mro if c is not object))

    def contains(self, name: str) -> bool:
        return name in self._components

    def ancestors(self) -> Iterator["ScopedComponentRegistry"]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def _levels(self, scope: SearchScope) -> List["ScopedComponentRegistry"]:
        if scope is SearchScope.CURRENT:
            return [self]
        if scope is SearchScope.ANCESTORS:
            return list(self.ancestors())
        return [self, *self.ancestors()]

    def find(
        self,
        type_id: Optional[str] = None,
        name: Optional[str] = None,
        scope: SearchScope = SearchScope.ALL,
    ) -> Set[str]:
        """Return names of components matching every given filter within ``scope``."""
        found: Set[str] = set()
        for level in self._levels(SearchScope.parse(scope)):
            for definition in level._components.values():
                if name is not None and definition.name != name:
                    continue
                if type_id is not None and type_id not in definition.types:
                    continue
                found.add(definition.name)
        return found


__all__ = ["SearchScope", "ComponentRegistry", "ComponentDefinition", "ScopedComponentRegistry"]
