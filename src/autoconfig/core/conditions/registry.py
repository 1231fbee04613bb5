"""Registry of condition kinds used when building conditions from manifests.

Each kind name maps to a factory that turns a declarative mapping (as read
from YAML) into a :class:`~autoconfig.core.conditions.base.Condition`.

Example usage:
    registry = ConditionKindRegistry()
    cond = registry.build({"kind": "on_property", "prefix": "app", "name": "feature"})

    # Custom kinds
    registry.register("on_flag", lambda spec: MyFlagCondition(spec["flag"]))
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from autoconfig.core.exceptions import ConfigurationError

from .base import Condition, as_list
from .on_component import ComponentAbsenceCondition, ComponentPresenceCondition
from .on_property import PropertyMatchCondition, PropertySpec
from .on_resource import ResourceExistsCondition
from .on_runtime_mode import RuntimeModeCondition
from .on_type import RequireMode, TypePresenceCondition

ConditionFactory = Callable[[Mapping[str, Any]], Condition]


def _on_type(spec: Mapping[str, Any]) -> Condition:
    return TypePresenceCondition(as_list(spec.get("types")), RequireMode.ALL)


def _on_missing_type(spec: Mapping[str, Any]) -> Condition:
    return TypePresenceCondition(as_list(spec.get("types")), RequireMode.NONE)


def _on_property(spec: Mapping[str, Any]) -> Condition:
    nested = spec.get("properties")
    if isinstance(nested, list):
        return PropertyMatchCondition(*(PropertySpec.from_mapping(item or {}) for item in nested))
    return PropertyMatchCondition(PropertySpec.from_mapping(spec))


def _on_resource(spec: Mapping[str, Any]) -> Condition:
    return ResourceExistsCondition(as_list(spec.get("resources")))


def _on_component(spec: Mapping[str, Any]) -> Condition:
    return ComponentPresenceCondition(spec.get("type"), spec.get("name"), spec.get("search", "all"))


def _on_missing_component(spec: Mapping[str, Any]) -> Condition:
    return ComponentAbsenceCondition(spec.get("type"), spec.get("name"), spec.get("search", "all"))


def _on_runtime_mode(spec: Mapping[str, Any]) -> Condition:
    return RuntimeModeCondition(spec.get("mode", "any"))


class ConditionKindRegistry:
    """Map condition kind names to factories."""

    def __init__(self, *, preload_defaults: bool = True) -> None:
        self._factories: Dict[str, ConditionFactory] = {}
        if preload_defaults:
            self.register_defaults()

    def register(self, kind: str, factory: ConditionFactory) -> None:
        if not callable(factory):
            raise TypeError("factory must be callable")
        self._factories[kind] = factory

    def get(self, kind: str) -> Optional[ConditionFactory]:
        return self._factories.get(kind)

    def has(self, kind: str) -> bool:
        return kind in self._factories

    def kinds(self) -> List[str]:
        return sorted(self._factories)

    def reset(self) -> None:
        """Clear all kinds and reload defaults."""
        self._factories.clear()
        self.register_defaults()

    def register_defaults(self) -> None:
        self.register("on_type", _on_type)
        self.register("on_missing_type", _on_missing_type)
        self.register("on_property", _on_property)
        self.register("on_resource", _on_resource)
        self.register("on_component", _on_component)
        self.register("on_missing_component", _on_missing_component)
        self.register("on_runtime_mode", _on_runtime_mode)

    def build(self, spec: Mapping[str, Any], *, candidate: Optional[str] = None) -> Condition:
        kind = str(spec.get("kind") or "").strip()
        factory = self.get(kind)
        if factory is None:
            raise ConfigurationError(
                f"Unknown condition kind: {kind or '<missing>'} (known: {', '.join(self.kinds())})",
                candidate=candidate,
                field="kind",
            )
        try:
            return factory(spec)
        except ConfigurationError as exc:
            if candidate:
                exc.for_candidate(candidate)
            raise


__all__ = ["ConditionKindRegistry", "ConditionFactory"]
