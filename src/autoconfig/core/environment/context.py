from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

from autoconfig.core.runtime import (
    ContextType,
    RuntimeMarkers,
    RuntimeMode,
    deduce_from_environment,
    deduce_from_type,
)

from .properties import MapPropertyResolver, PropertyResolver
from .registry import ComponentRegistry, ScopedComponentRegistry
from .resources import FileSystemResourceLocator, ResourceLocator
from .types import ImportTypeOracle, TypePresenceOracle


@dataclass(frozen=True)
class EvaluationContext:
    """Read-only bundle of environment queries shared by one evaluation pass.

    Attributes:
        properties: Property resolver
        resources: Resource locator
        registry: Component registry (the current level of the hierarchy)
        types: Type presence oracle
        markers: Runtime marker identifiers
        application_type: Known application context type; when set, the
            runtime mode is deduced from it instead of from the environment
    """

    properties: PropertyResolver = field(default_factory=MapPropertyResolver)
    resources: ResourceLocator = field(default_factory=FileSystemResourceLocator)
    registry: ComponentRegistry = field(default_factory=ScopedComponentRegistry)
    types: TypePresenceOracle = field(default_factory=ImportTypeOracle)
    markers: RuntimeMarkers = field(default_factory=RuntimeMarkers)
    application_type: Optional[ContextType] = None

    @cached_property
    def runtime_mode(self) -> RuntimeMode:
        if self.application_type is not None:
            return deduce_from_type(self.application_type, self.markers)
        return deduce_from_environment(self.types, self.markers)


__all__ = ["EvaluationContext"]
