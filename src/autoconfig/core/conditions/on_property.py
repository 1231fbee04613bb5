"""Property-match condition.

A :class:`PropertySpec` names one or more properties (optionally under a
prefix) and what their values must look like:

- with ``having_value`` set, the value must equal it (case-insensitive);
- without it, the value must not be ``false`` (case-insensitive);
- a missing property fails unless ``match_if_missing`` is true.

Several specs on one condition are evaluated independently and ANDed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional, Tuple, Union

from autoconfig.core.exceptions import ConfigurationError
from autoconfig.core.outcome import ConditionMessage, ConditionOutcome

from .base import Condition, as_list

if TYPE_CHECKING:
    from autoconfig.core.environment.context import EvaluationContext
    from autoconfig.core.environment.properties import PropertyResolver

Names = Union[str, Iterable[str], None]


def _normalize_prefix(prefix: Optional[str]) -> str:
    value = (prefix or "").strip()
    if value and not value.endswith("."):
        value += "."
    return value


@dataclass(frozen=True)
class PropertySpec:
    prefix: str
    names: Tuple[str, ...]
    having_value: str = ""
    match_if_missing: bool = False

    @classmethod
    def of(
        cls,
        *,
        prefix: Optional[str] = "",
        name: Names = None,
        value: Names = None,
        having_value: Optional[str] = "",
        match_if_missing: bool = False,
    ) -> "PropertySpec":
        """Build a spec; ``name`` and ``value`` are aliases and exactly one must be given."""
        names = as_list(name)
        values = as_list(value)
        if not names and not values:
            raise ConfigurationError(
                "The name or value attribute of on_property must be specified",
                field="name",
            )
        if names and values:
            raise ConfigurationError(
                "The name and value attributes of on_property are exclusive",
                field="name",
            )
        return cls(
            prefix=_normalize_prefix(prefix),
            names=tuple(values or names),
            having_value="" if having_value is None else str(having_value),
            match_if_missing=bool(match_if_missing),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PropertySpec":
        match_if_missing = data.get("matchIfMissing", False)
        if not isinstance(match_if_missing, bool):
            raise ConfigurationError(
                f"matchIfMissing must be true or false, got {match_if_missing!r}",
                field="matchIfMissing",
            )
        return cls.of(
            prefix=data.get("prefix"),
            name=data.get("name"),
            value=data.get("value"),
            having_value=data.get("havingValue"),
            match_if_missing=match_if_missing,
        )

    def collect(self, resolver: "PropertyResolver") -> Tuple[List[str], List[str]]:
        """Return ``(missing, non_matching)`` property names."""
        missing: List[str] = []
        non_matching: List[str] = []
        for name in self.names:
            key = self.prefix + name
            if resolver.has_property(key):
                if not self.is_match(resolver.get_property(key)):
                    non_matching.append(name)
            elif not self.match_if_missing:
                missing.append(name)
        return missing, non_matching

    def is_match(self, value: Optional[str]) -> bool:
        actual = "" if value is None else str(value)
        if self.having_value:
            return self.having_value.lower() == actual.lower()
        return actual.lower() != "false"

    def __str__(self) -> str:
        names = self.names[0] if len(self.names) == 1 else f"[{', '.join(self.names)}]"
        expected = f"={self.having_value}" if self.having_value else ""
        return f"({self.prefix}{names}{expected})"


class PropertyMatchCondition(Condition):
    kind = "on_property"

    def __init__(self, *specs: PropertySpec) -> None:
        if not specs:
            raise ConfigurationError("At least one property spec must be specified", field="name")
        self.specs: Tuple[PropertySpec, ...] = tuple(specs)

    @classmethod
    def of(cls, **kwargs: Any) -> "PropertyMatchCondition":
        return cls(PropertySpec.of(**kwargs))

    def describe(self) -> str:
        return " ".join(str(s) for s in self.specs)

    def evaluate(self, context: "EvaluationContext") -> ConditionOutcome:
        return ConditionOutcome.combine([self._outcome_for(spec, context.properties) for spec in self.specs])

    def _outcome_for(self, spec: PropertySpec, resolver: "PropertyResolver") -> ConditionOutcome:
        missing, non_matching = spec.collect(resolver)
        message = ConditionMessage.for_condition(self.kind, str(spec))
        if missing:
            return ConditionOutcome.no_match(
                message.did_not_find("property", "properties").items(missing, quote=True)
            )
        if non_matching:
            return ConditionOutcome.no_match(
                message.found("different value in property", "different value in properties").items(
                    non_matching, quote=True
                )
            )
        return ConditionOutcome.match(message.because("matched"))


__all__ = ["PropertySpec", "PropertyMatchCondition"]
