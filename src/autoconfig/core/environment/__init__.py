"""Environment collaborators queried by conditions.

Each collaborator is a :class:`typing.Protocol` with one or more default
implementations; callers may substitute their own. The
:class:`~autoconfig.core.environment.context.EvaluationContext` bundling them
lives in ``autoconfig.core.environment.context`` (it depends on the runtime
mode deducer, which itself uses the type oracles exported here).
"""
from __future__ import annotations

from .properties import MapPropertyResolver, PropertyResolver, flatten_properties
from .registry import ComponentDefinition, ComponentRegistry, ScopedComponentRegistry, SearchScope
from .resources import FileSystemResourceLocator, ResourceLocator, StaticResourceLocator
from .types import ImportTypeOracle, StaticTypeOracle, TypePresenceOracle, type_id_of

__all__ = [
    # properties
    "PropertyResolver",
    "MapPropertyResolver",
    "flatten_properties",
    # registry
    "SearchScope",
    "ComponentRegistry",
    "ComponentDefinition",
    "ScopedComponentRegistry",
    # resources
    "ResourceLocator",
    "FileSystemResourceLocator",
    "StaticResourceLocator",
    # types
    "TypePresenceOracle",
    "ImportTypeOracle",
    "StaticTypeOracle",
    "type_id_of",
]
