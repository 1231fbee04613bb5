from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Tuple

from autoconfig.core.exceptions import ConfigurationError
from autoconfig.core.outcome import ConditionMessage, ConditionOutcome

from .base import Condition, as_list

if TYPE_CHECKING:
    from autoconfig.core.environment.context import EvaluationContext

logger = logging.getLogger(__name__)


class ResourceExistsCondition(Condition):
    """Match when every location exists (placeholders resolved first)."""

    kind = "on_resource"

    def __init__(self, locations: Iterable[str]) -> None:
        self.locations: Tuple[str, ...] = tuple(as_list(locations))
        if not self.locations:
            raise ConfigurationError(
                "on_resource must specify at least one resource location",
                field="resources",
            )

    def describe(self) -> str:
        return f"({', '.join(self.locations)})"

    def evaluate(self, context: "EvaluationContext") -> ConditionOutcome:
        missing: List[str] = []
        for location in self.locations:
            resolved = context.properties.resolve_placeholders(location)
            if not self._exists(context, resolved):
                missing.append(location)

        message = ConditionMessage.for_condition(self.kind)
        if missing:
            return ConditionOutcome.no_match(
                message.did_not_find("resource", "resources").items(missing, quote=True)
            )
        return ConditionOutcome.match(message.found("location", "locations").items(self.locations))

    @staticmethod
    def _exists(context: "EvaluationContext", location: str) -> bool:
        try:
            return bool(context.resources.exists(location))
        except Exception as exc:
            logger.debug("Resource lookup for %s failed: %s", location, exc)
            return False


__all__ = ["ResourceExistsCondition"]
