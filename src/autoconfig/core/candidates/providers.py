"""Candidate providers: the registry-lookup discovery feed.

A provider answers ``list_candidates(marker_key)`` with the identities
registered under that key, e.g. from a YAML factories file::

    autoconfig.configuration_module:
      - app.web.DispatcherConfiguration
      - app.data.DataSourceConfiguration
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Protocol, Sequence, runtime_checkable

from autoconfig.core.conditions.base import as_list
from autoconfig.core.exceptions import ManifestError
from autoconfig.core.utils.io import read_yaml

logger = logging.getLogger(__name__)

CONFIGURATION_MODULE_KEY = "autoconfig.configuration_module"


@runtime_checkable
class CandidateProvider(Protocol):
    def list_candidates(self, marker_key: str) -> List[str]: ...


def _dedupe(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


class StaticCandidateProvider:
    def __init__(self, entries: Mapping[str, Iterable[str]] | None = None) -> None:
        self._entries: Dict[str, List[str]] = {k: as_list(list(v)) for k, v in (entries or {}).items()}

    def list_candidates(self, marker_key: str) -> List[str]:
        return list(self._entries.get(marker_key, []))


class YamlCandidateProvider:
    """Merge marker-key listings from several YAML factories files (first listing wins)."""

    def __init__(self, paths: Sequence[Path]) -> None:
        self.paths = [Path(p) for p in paths]

    def list_candidates(self, marker_key: str) -> List[str]:
        found: List[str] = []
        for path in self.paths:
            if not path.exists():
                logger.debug("Factories file %s does not exist; skipping", path)
                continue
            data = self._load(path)
            found.extend(as_list(data.get(marker_key)))
        return _dedupe(found)

    @staticmethod
    def _load(path: Path) -> Dict[str, Any]:
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            raise ManifestError(f"Cannot read factories file {path}: {exc}", field="<file>") from exc
        if not isinstance(data, dict):
            raise ManifestError(f"Factories file {path} must contain a mapping", field="<root>")
        return data


__all__ = [
    "CONFIGURATION_MODULE_KEY",
    "CandidateProvider",
    "StaticCandidateProvider",
    "YamlCandidateProvider",
]
