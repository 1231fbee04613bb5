"""Type presence oracles.

An oracle answers "is type T resolvable in this environment?". Type
identifiers are dotted paths (``package.module.Name`` or nested attributes such
as ``package.module.Outer.Inner``). Resolution failures of any kind are
reported as absence, never raised.
"""
from __future__ import annotations

import importlib
import logging
from typing import Any, Dict, Iterable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class TypePresenceOracle(Protocol):
    def is_present(self, type_id: str) -> bool: ...


def type_id_of(cls: type) -> str:
    """Return the dotted identifier used for ``cls`` throughout the engine."""
    return f"{cls.__module__}.{cls.__qualname__}"


def is_type_present(oracle: TypePresenceOracle, type_id: str) -> bool:
    """Ask ``oracle`` about ``type_id``; any failure counts as absence."""
    try:
        return bool(oracle.is_present(type_id))
    except Exception as exc:
        logger.debug("Type presence check for %s failed: %s", type_id, exc)
        return False


class ImportTypeOracle:
    """Resolve identifiers by importing their module (results cached per instance)."""

    def __init__(self) -> None:
        self._cache: Dict[str, Optional[Any]] = {}

    def resolve(self, type_id: str) -> Optional[Any]:
        key = (type_id or "").strip()
        if key in self._cache:
            return self._cache[key]
        resolved = self._resolve_uncached(key)
        self._cache[key] = resolved
        return resolved

    def is_present(self, type_id: str) -> bool:
        return self.resolve(type_id) is not None

    def clear(self) -> None:
        self._cache.clear()

    @staticmethod
    def _resolve_uncached(type_id: str) -> Optional[Any]:
        if not type_id or type_id.startswith(".") or type_id.endswith(".") or ".." in type_id:
            return None
        parts = type_id.split(".")
        # Longest importable module prefix wins; the rest are attributes.
        for split in range(len(parts), 0, -1):
            module_name = ".".join(parts[:split])
            try:
                obj: Any = importlib.import_module(module_name)
            except ImportError:
                continue
            except Exception as exc:
                logger.debug("Importing %s failed while resolving %s: %s", module_name, type_id, exc)
                return None
            try:
                for attr in parts[split:]:
                    obj = getattr(obj, attr)
            except AttributeError:
                return None
            return obj
        return None


class StaticTypeOracle:
    """Oracle over a fixed set of identifiers."""

    def __init__(self, present: Iterable[str] = ()) -> None:
        self._present = frozenset(str(t) for t in present)

    def is_present(self, type_id: str) -> bool:
        return type_id in self._present


__all__ = [
    "TypePresenceOracle",
    "ImportTypeOracle",
    "StaticTypeOracle",
    "is_type_present",
    "type_id_of",
]
