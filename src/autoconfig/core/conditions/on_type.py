from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Tuple

from autoconfig.core.environment.types import is_type_present
from autoconfig.core.exceptions import ConfigurationError
from autoconfig.core.outcome import ConditionMessage, ConditionOutcome

from .base import Condition, as_list

if TYPE_CHECKING:
    from autoconfig.core.environment.context import EvaluationContext


class RequireMode(str, Enum):
    ALL = "require_all"
    NONE = "require_none"


class TypePresenceCondition(Condition):
    """Match when all (or none) of the given types resolve."""

    def __init__(self, types: Iterable[str], mode: RequireMode = RequireMode.ALL) -> None:
        self.types: Tuple[str, ...] = tuple(as_list(types))
        if not self.types:
            raise ConfigurationError("At least one type must be specified", field="types")
        self.mode = RequireMode(mode)
        self.kind = "on_type" if self.mode is RequireMode.ALL else "on_missing_type"

    def describe(self) -> str:
        return f"({self.mode.value}: {', '.join(self.types)})"

    def evaluate(self, context: "EvaluationContext") -> ConditionOutcome:
        present: List[str] = []
        missing: List[str] = []
        for type_id in self.types:
            (present if is_type_present(context.types, type_id) else missing).append(type_id)

        message = ConditionMessage.for_condition(self.kind)
        if self.mode is RequireMode.ALL:
            if missing:
                return ConditionOutcome.no_match(
                    message.did_not_find("required type", "required types").items(missing, quote=True)
                )
            return ConditionOutcome.match(
                message.found("required type", "required types").items(present, quote=True)
            )

        if present:
            return ConditionOutcome.no_match(
                message.found("unwanted type", "unwanted types").items(present, quote=True)
            )
        return ConditionOutcome.match(
            message.did_not_find("unwanted type", "unwanted types").items(missing, quote=True)
        )


__all__ = ["RequireMode", "TypePresenceCondition", "is_type_present"]
