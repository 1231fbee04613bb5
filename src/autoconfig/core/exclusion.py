"""Exclusion of structural-scan duplicates.

A configuration module may be reachable twice: once through structural
scanning of base packages, and once through the candidate provider. The
:class:`ExclusionFilter` rejects the scan hit when both feeds agree:

- the identity is listed by the provider under the configuration-module key;
- the type's own descriptor carries the configuration-module marker.

The two feeds are independent; they are reconciled by intersection only.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Protocol, Set, runtime_checkable

from autoconfig.core.candidates.providers import CONFIGURATION_MODULE_KEY, CandidateProvider
from autoconfig.core.environment.types import ImportTypeOracle

logger = logging.getLogger(__name__)

CONFIGURATION_MODULE_MARKER = "configuration_module"
_MARKERS_ATTR = "__autoconfig_markers__"


@dataclass(frozen=True)
class TypeDescriptor:
    """Opaque static metadata about a type: its identity and declared markers."""

    identity: str
    markers: FrozenSet[str] = field(default_factory=frozenset)

    def has_marker(self, marker: str) -> bool:
        return marker in self.markers


@runtime_checkable
class DescriptorReader(Protocol):
    def read(self, identity: str) -> Optional[TypeDescriptor]: ...


def configuration_module(cls: type) -> type:
    """Class decorator marking ``cls`` as a configuration module."""
    markers = set(getattr(cls, _MARKERS_ATTR, ()))
    markers.add(CONFIGURATION_MODULE_MARKER)
    setattr(cls, _MARKERS_ATTR, frozenset(markers))
    return cls


class ImportDescriptorReader:
    """Read markers set by :func:`configuration_module` on importable classes."""

    def __init__(self, oracle: Optional[ImportTypeOracle] = None) -> None:
        self._oracle = oracle or ImportTypeOracle()

    def read(self, identity: str) -> Optional[TypeDescriptor]:
        obj = self._oracle.resolve(identity)
        if not isinstance(obj, type):
            return None
        # Only markers declared on the class itself count, not inherited ones.
        markers = obj.__dict__.get(_MARKERS_ATTR, frozenset())
        return TypeDescriptor(identity, frozenset(markers))


class StaticDescriptorReader:
    def __init__(self, descriptors: Iterable[TypeDescriptor] = ()) -> None:
        self._descriptors: Dict[str, TypeDescriptor] = {d.identity: d for d in descriptors}

    def read(self, identity: str) -> Optional[TypeDescriptor]:
        return self._descriptors.get(identity)


class ExclusionFilter:
    """Reject identities that are provided configuration modules.

    The provider listing is fetched on first use and cached for the lifetime
    of this filter (one scanning pass).
    """

    def __init__(
        self,
        provider: CandidateProvider,
        descriptors: DescriptorReader,
        *,
        marker_key: str = CONFIGURATION_MODULE_KEY,
    ) -> None:
        self._provider = provider
        self._descriptors = descriptors
        self._marker_key = marker_key
        self._known: Optional[Set[str]] = None

    def known_candidates(self) -> Set[str]:
        if self._known is None:
            self._known = set(self._provider.list_candidates(self._marker_key))
            logger.debug("Exclusion filter loaded %d provided candidate(s)", len(self._known))
        return self._known

    def is_excluded(self, identity: str) -> bool:
        return self._is_provided(identity) and self._is_marked(identity)

    def _is_provided(self, identity: str) -> bool:
        return identity in self.known_candidates()

    def _is_marked(self, identity: str) -> bool:
        try:
            descriptor = self._descriptors.read(identity)
        except Exception as exc:
            logger.debug("Reading descriptor for %s failed: %s", identity, exc)
            return False
        return descriptor is not None and descriptor.has_marker(CONFIGURATION_MODULE_MARKER)

    def __call__(self, identity: str) -> bool:
        return self.is_excluded(identity)


ExcludePredicate = Callable[[str], bool]


class CompositeExcludeFilter:
    """Exclude an identity when any registered delegate filter matches it."""

    def __init__(self, delegates: Iterable[ExcludePredicate] = ()) -> None:
        self._delegates: List[ExcludePredicate] = list(delegates)

    def register(self, delegate: ExcludePredicate) -> None:
        if not callable(delegate):
            raise TypeError("delegate must be callable")
        self._delegates.append(delegate)

    def is_excluded(self, identity: str) -> bool:
        return any(delegate(identity) for delegate in self._delegates)

    def __call__(self, identity: str) -> bool:
        return self.is_excluded(identity)


__all__ = [
    "CONFIGURATION_MODULE_MARKER",
    "TypeDescriptor",
    "DescriptorReader",
    "ImportDescriptorReader",
    "StaticDescriptorReader",
    "ExclusionFilter",
    "CompositeExcludeFilter",
    "configuration_module",
]
