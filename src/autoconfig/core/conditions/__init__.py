"""Condition variants evaluated against an EvaluationContext."""
from __future__ import annotations

from .base import Condition
from .on_component import ComponentAbsenceCondition, ComponentPresenceCondition
from .on_property import PropertyMatchCondition, PropertySpec
from .on_resource import ResourceExistsCondition
from .on_runtime_mode import RequestedMode, RuntimeModeCondition
from .on_type import RequireMode, TypePresenceCondition
from .registry import ConditionFactory, ConditionKindRegistry

__all__ = [
    "Condition",
    "TypePresenceCondition",
    "RequireMode",
    "PropertyMatchCondition",
    "PropertySpec",
    "ResourceExistsCondition",
    "ComponentPresenceCondition",
    "ComponentAbsenceCondition",
    "RuntimeModeCondition",
    "RequestedMode",
    "ConditionKindRegistry",
    "ConditionFactory",
]
