from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Set

from autoconfig.core.environment.registry import SearchScope
from autoconfig.core.exceptions import ConfigurationError
from autoconfig.core.outcome import ConditionMessage, ConditionOutcome

from .base import Condition

if TYPE_CHECKING:
    from autoconfig.core.environment.context import EvaluationContext

logger = logging.getLogger(__name__)


class _ComponentCondition(Condition):
    """Query the component registry by type and/or name within a search scope."""

    def __init__(
        self,
        type_id: Optional[str] = None,
        name: Optional[str] = None,
        scope: "SearchScope | str" = SearchScope.ALL,
    ) -> None:
        self.type_id = (type_id or "").strip() or None
        self.name = (name or "").strip() or None
        if self.type_id is None and self.name is None:
            raise ConfigurationError(
                f"{self.kind} requires a component type or name",
                field="type",
            )
        self.scope = SearchScope.parse(scope)

    def describe(self) -> str:
        parts: List[str] = []
        if self.type_id:
            parts.append(f"types: {self.type_id}")
        if self.name:
            parts.append(f"names: {self.name}")
        parts.append(f"search: {self.scope.value}")
        return f"({'; '.join(parts)})"

    def _matches(self, context: "EvaluationContext") -> Set[str]:
        try:
            return set(context.registry.find(type_id=self.type_id, name=self.name, scope=self.scope))
        except Exception as exc:
            logger.debug("Component lookup %s failed: %s", self.describe(), exc)
            return set()


class ComponentPresenceCondition(_ComponentCondition):
    kind = "on_component"

    def evaluate(self, context: "EvaluationContext") -> ConditionOutcome:
        found = self._matches(context)
        message = ConditionMessage.for_condition(self.kind, self.describe())
        if not found:
            return ConditionOutcome.no_match(message.did_not_find("component", "components").at_all())
        return ConditionOutcome.match(message.found("component", "components").items(sorted(found), quote=True))


class ComponentAbsenceCondition(_ComponentCondition):
    kind = "on_missing_component"

    def evaluate(self, context: "EvaluationContext") -> ConditionOutcome:
        found = self._matches(context)
        message = ConditionMessage.for_condition(self.kind, self.describe())
        if found:
            return ConditionOutcome.no_match(message.found("component", "components").items(sorted(found), quote=True))
        return ConditionOutcome.match(message.did_not_find("component", "components").at_all())


__all__ = ["ComponentPresenceCondition", "ComponentAbsenceCondition"]
