"""
Condition evaluation and the activation pass.

One pass: collected candidates are ordered, each candidate's conditions are
evaluated against a single shared EvaluationContext (stopping at the first
failure), and the matching candidates are returned in activation order.

Failing candidates are simply left out; only configuration errors abort.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

from autoconfig.core.candidates.model import Candidate
from autoconfig.core.candidates.ordering import OrderingResolver
from autoconfig.core.environment.context import EvaluationContext
from autoconfig.core.exceptions import ConfigurationError
from autoconfig.core.outcome import ConditionOutcome
from autoconfig.core.report import ConditionEvaluationReport

logger = logging.getLogger(__name__)

ENABLED_PROPERTY = "autoconfig.enabled"
EXCLUDE_PROPERTY = "autoconfig.exclude"


class ConditionEvaluator:
    def evaluate(self, candidate: Candidate, context: EvaluationContext) -> ConditionOutcome:
        """Evaluate ``candidate``'s conditions in declared order.

        Returns the first failing condition's outcome, or the concatenated
        clauses of every passing condition. A candidate without conditions
        matches unconditionally.
        """
        passed: List[ConditionOutcome] = []
        for condition in candidate.conditions:
            try:
                outcome = condition.evaluate(context)
            except ConfigurationError as exc:
                exc.for_candidate(candidate.identity)
                raise
            logger.debug("%s: %s %s", candidate.identity, condition.kind, outcome)
            if not outcome.matched:
                return outcome
            passed.append(outcome)
        return ConditionOutcome.combine(passed)


@dataclass
class ActivationResult:
    """Result of one activation pass.

    Attributes:
        activated: Identities whose conditions matched, in activation order
        order: Every evaluated identity, in activation order
        outcomes: Outcome per evaluated identity
        excluded: Identities removed by explicit exclusion
        enabled: False when auto-configuration was switched off
    """

    activated: List[str] = field(default_factory=list)
    order: List[str] = field(default_factory=list)
    outcomes: Dict[str, ConditionOutcome] = field(default_factory=dict)
    excluded: List[str] = field(default_factory=list)
    enabled: bool = True
    report: ConditionEvaluationReport = field(default_factory=ConditionEvaluationReport, compare=False)


def _split_names(raw: Optional[str]) -> List[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


class ActivationPass:
    """Order, filter and evaluate candidates against one shared context."""

    def __init__(
        self,
        candidates: Iterable[Candidate],
        context: EvaluationContext,
        *,
        exclude: Sequence[str] = (),
        enabled: Optional[bool] = None,
        resolver: Optional[OrderingResolver] = None,
        evaluator: Optional[ConditionEvaluator] = None,
    ) -> None:
        self.candidates = list(candidates)
        self.context = context
        self.exclude = list(exclude)
        self.enabled = enabled
        self.resolver = resolver or OrderingResolver()
        self.evaluator = evaluator or ConditionEvaluator()

    def is_enabled(self) -> bool:
        if self.enabled is not None:
            return self.enabled
        value = self.context.properties.get_property(ENABLED_PROPERTY)
        return value is None or value.strip().lower() != "false"

    def exclusions(self) -> Set[str]:
        names = set(self.exclude)
        names.update(_split_names(self.context.properties.get_property(EXCLUDE_PROPERTY)))
        return names

    def run(self) -> ActivationResult:
        result = ActivationResult()
        if not self.is_enabled():
            logger.info("Auto-configuration disabled; no candidates activated")
            result.enabled = False
            return result

        exclusions = self.exclusions()
        known = {c.identity for c in self.candidates}
        for name in sorted(exclusions - known):
            logger.debug("Excluded identity %s is not a known candidate", name)

        remaining = [c for c in self.candidates if c.identity not in exclusions]
        result.excluded = [c.identity for c in self.candidates if c.identity in exclusions]
        result.report.record_exclusions(result.excluded)

        by_id = {c.identity: c for c in remaining}
        result.order = self.resolver.resolve(remaining)
        for identity in result.order:
            outcome = self.evaluator.evaluate(by_id[identity], self.context)
            result.outcomes[identity] = outcome
            result.report.record(identity, outcome)
            if outcome.matched:
                result.activated.append(identity)

        logger.info(
            "Activation pass: %d candidate(s), %d activated, %d excluded",
            len(self.candidates),
            len(result.activated),
            len(result.excluded),
        )
        return result


__all__ = [
    "ActivationPass",
    "ActivationResult",
    "ConditionEvaluator",
    "ENABLED_PROPERTY",
    "EXCLUDE_PROPERTY",
]
