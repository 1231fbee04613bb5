from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from autoconfig.core.exceptions import ConfigurationError
from autoconfig.core.outcome import ConditionMessage, ConditionOutcome
from autoconfig.core.runtime import RuntimeMode

from .base import Condition

if TYPE_CHECKING:
    from autoconfig.core.environment.context import EvaluationContext


class RequestedMode(str, Enum):
    ANY = "any"
    SERVLET = "servlet"
    REACTIVE = "reactive"

    @classmethod
    def parse(cls, value: "str | RequestedMode") -> "RequestedMode":
        if isinstance(value, RequestedMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown runtime mode {value!r} (expected any, servlet or reactive)",
                field="mode",
            ) from None


class RuntimeModeCondition(Condition):
    """Match when the deduced runtime mode is the requested one (ANY: not NONE)."""

    kind = "on_runtime_mode"

    def __init__(self, mode: "RequestedMode | str" = RequestedMode.ANY) -> None:
        self.mode = RequestedMode.parse(mode)

    def describe(self) -> str:
        return f"({self.mode.value})"

    def evaluate(self, context: "EvaluationContext") -> ConditionOutcome:
        deduced = context.runtime_mode
        message = ConditionMessage.for_condition(self.kind, self.describe())
        if self.mode is RequestedMode.ANY:
            matched = deduced is not RuntimeMode.NONE
        else:
            matched = deduced.value == self.mode.value
        if matched:
            return ConditionOutcome.match(message.found("runtime mode").items([deduced.value]))
        return ConditionOutcome.no_match(message.because(f"deduced runtime mode is {deduced.value}"))


__all__ = ["RequestedMode", "RuntimeModeCondition"]
