"""Domain-specific configuration for the activation pass.

Provides cached access to the ``autoconfig`` section: the global enable
switch, explicit exclusions, candidate manifests and provider listings.
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import List

from autoconfig.core.candidates.providers import CONFIGURATION_MODULE_KEY, YamlCandidateProvider

from ..base import BaseDomainConfig


def _as_str_list(value: object) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(v) for v in value if str(v).strip()]  # type: ignore[union-attr]


class ActivationConfig(BaseDomainConfig):
    """Accessor for the ``autoconfig`` section.

    Usage:
        activation = ActivationConfig(repo_root=Path("/path/to/project"))
        if activation.enabled:
            excluded = activation.exclude
    """

    def _config_section(self) -> str:
        return "autoconfig"

    @cached_property
    def enabled(self) -> bool:
        value = self.section.get("enabled", True)
        if isinstance(value, str):
            return value.strip().lower() != "false"
        return bool(value)

    @cached_property
    def exclude(self) -> List[str]:
        return _as_str_list(self.section.get("exclude"))

    @cached_property
    def marker_key(self) -> str:
        return str(self.section.get("markerKey") or CONFIGURATION_MODULE_KEY)

    def _resolve_paths(self, key: str) -> List[Path]:
        out: List[Path] = []
        for raw in _as_str_list(self.section.get(key)):
            path = Path(raw).expanduser()
            out.append(path if path.is_absolute() else self.repo_root / path)
        return out

    @cached_property
    def manifests(self) -> List[Path]:
        """Candidate manifest files, resolved against the project root."""
        return self._resolve_paths("manifests")

    @cached_property
    def factories_path(self) -> List[Path]:
        """Provider listing files, resolved against the project root."""
        return self._resolve_paths("factories")

    def provider(self) -> YamlCandidateProvider:
        return YamlCandidateProvider(self.factories_path)


__all__ = ["ActivationConfig"]
