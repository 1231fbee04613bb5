"""Condition evaluation report for startup diagnostics."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from autoconfig.core.outcome import ConditionOutcome


class ConditionEvaluationReport:
    """Collects each candidate's outcome and the explicit exclusions of one pass."""

    def __init__(self) -> None:
        self._outcomes: Dict[str, ConditionOutcome] = {}
        self._exclusions: List[str] = []

    def record(self, identity: str, outcome: ConditionOutcome) -> None:
        self._outcomes[identity] = outcome

    def record_exclusions(self, identities: Iterable[str]) -> None:
        for identity in identities:
            if identity not in self._exclusions:
                self._exclusions.append(identity)

    @property
    def outcomes(self) -> Dict[str, ConditionOutcome]:
        return dict(self._outcomes)

    @property
    def exclusions(self) -> List[str]:
        return list(self._exclusions)

    def positive_matches(self) -> Dict[str, ConditionOutcome]:
        return {k: v for k, v in self._outcomes.items() if v.matched}

    def negative_matches(self) -> Dict[str, ConditionOutcome]:
        return {k: v for k, v in self._outcomes.items() if not v.matched}

    def to_dict(self) -> Dict[str, Any]:
        def _entry(outcome: ConditionOutcome) -> List[str]:
            return [c.render() for c in outcome.clauses]

        return {
            "positiveMatches": {k: _entry(v) for k, v in self.positive_matches().items()},
            "negativeMatches": {k: _entry(v) for k, v in self.negative_matches().items()},
            "exclusions": self.exclusions,
        }

    def render(self) -> str:
        lines: List[str] = [
            "",
            "=" * 27,
            "CONDITION EVALUATION REPORT",
            "=" * 27,
            "",
        ]
        lines.extend(self._section("Positive matches", self.positive_matches(), header=None))
        lines.extend(self._section("Negative matches", self.negative_matches(), header="Did not match:"))
        lines.extend(["Exclusions:", "-" * 11, ""])
        if self._exclusions:
            lines.extend(f"   {identity}" for identity in self._exclusions)
        else:
            lines.append("   None")
        lines.append("")
        return "\n".join(lines)

    @staticmethod
    def _section(title: str, outcomes: Dict[str, ConditionOutcome], header: str | None) -> List[str]:
        lines = [f"{title}:", "-" * (len(title) + 1), ""]
        if not outcomes:
            lines.extend(["   None", ""])
            return lines
        for identity, outcome in outcomes.items():
            lines.append(f"   {identity}:" if header else f"   {identity}")
            indent = "      "
            if header:
                lines.append(f"{indent}{header}")
                indent += "   "
            if not outcome.clauses:
                lines.append(f"{indent}- unconditional")
            for clause in outcome.clauses:
                lines.append(f"{indent}- {clause.render()}")
            lines.append("")
        return lines


__all__ = ["ConditionEvaluationReport"]
