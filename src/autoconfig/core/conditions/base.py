from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Union

from autoconfig.core.outcome import ConditionOutcome

if TYPE_CHECKING:
    from autoconfig.core.environment.context import EvaluationContext


class Condition(ABC):
    """A predicate over the runtime environment deciding whether a candidate activates.

    Implementations must be total over environment uncertainty: unresolvable
    types, unreachable resources or missing registry scopes produce a normal
    non-match outcome. Only malformed declarations raise, and they do so at
    construction time via :class:`~autoconfig.core.exceptions.ConfigurationError`.
    """

    #: Label used in explanations and in declarative manifests.
    kind: str = "condition"

    @abstractmethod
    def evaluate(self, context: "EvaluationContext") -> ConditionOutcome:
        """Return the outcome of this condition against ``context``."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.describe()}>"

    def describe(self) -> str:
        return ""


def as_list(value: Union[str, Iterable[str], None]) -> List[str]:
    """Normalize a scalar-or-list declaration into a list of non-blank strings."""
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[str] = [value]
    else:
        items = value
    return [str(v).strip() for v in items if v is not None and str(v).strip()]


__all__ = ["Condition", "as_list"]
