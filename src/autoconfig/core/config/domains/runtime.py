"""Domain-specific configuration for runtime-mode deduction."""
from __future__ import annotations

from functools import cached_property

from autoconfig.core.runtime import RuntimeMarkers

from ..base import BaseDomainConfig


class RuntimeConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "runtime"

    @cached_property
    def markers(self) -> RuntimeMarkers:
        """Marker type identifiers used to deduce the runtime mode."""
        return RuntimeMarkers.from_mapping(self.section.get("markers") or {})


__all__ = ["RuntimeConfig"]
