"""
Condition outcomes and their human-readable explanations.

Every condition reports a :class:`ConditionOutcome`: a match flag plus an
ordered tuple of :class:`Clause` entries. Clauses are built with the fluent
:class:`ConditionMessage` helpers, e.g.::

    ConditionMessage.for_condition("on_property", "(app.feature)") \\
        .did_not_find("property", "properties") \\
        .items(["feature"], quote=True)

which renders as ``on_property (app.feature) did not find property 'feature'``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

FOUND = "found"
DID_NOT_FIND = "did-not-find"
BECAUSE = "because"

VERBS = (FOUND, DID_NOT_FIND, BECAUSE)


@dataclass(frozen=True)
class Clause:
    """One piece of evidence for a condition decision.

    Attributes:
        subject: Condition label and details, e.g. ``on_type (require_all)``
        verb: One of ``found``, ``did-not-find`` or ``because``
        items: Evidence items (property names, type identifiers, reasons)
        noun: Optional noun describing the items (``property``, ``types``)
    """

    subject: str
    verb: str
    items: Tuple[str, ...] = ()
    noun: str = ""

    def __post_init__(self) -> None:
        if self.verb not in VERBS:
            raise ValueError(f"Unknown clause verb: {self.verb!r}")

    def render(self) -> str:
        parts: List[str] = [self.subject] if self.subject else []
        if self.verb == BECAUSE:
            parts.extend(self.items)
            return " ".join(parts)
        parts.append("found" if self.verb == FOUND else "did not find")
        if self.noun:
            parts.append(self.noun)
        if self.items:
            parts.append(", ".join(self.items))
        return " ".join(parts)

    def __str__(self) -> str:
        return self.render()


class _ItemsBuilder:
    def __init__(self, subject: str, verb: str, singular: str, plural: str) -> None:
        self._subject = subject
        self._verb = verb
        self._singular = singular
        self._plural = plural or singular

    def items(self, values: Iterable[object], *, quote: bool = False) -> "ConditionMessage":
        rendered = tuple(f"'{v}'" if quote else str(v) for v in values)
        noun = self._singular if len(rendered) == 1 else self._plural
        return ConditionMessage((Clause(self._subject, self._verb, rendered, noun),))

    def at_all(self) -> "ConditionMessage":
        """Record the noun with no items (``did not find any beans``)."""
        return ConditionMessage((Clause(self._subject, self._verb, (), f"any {self._plural}"),))


class _MessageBuilder:
    def __init__(self, subject: str) -> None:
        self._subject = subject

    def found(self, singular: str, plural: str = "") -> _ItemsBuilder:
        return _ItemsBuilder(self._subject, FOUND, singular, plural)

    def did_not_find(self, singular: str, plural: str = "") -> _ItemsBuilder:
        return _ItemsBuilder(self._subject, DID_NOT_FIND, singular, plural)

    def because(self, reason: str) -> "ConditionMessage":
        return ConditionMessage((Clause(self._subject, BECAUSE, (reason,)),))


@dataclass(frozen=True)
class ConditionMessage:
    """An ordered, immutable sequence of clauses."""

    clauses: Tuple[Clause, ...] = ()

    @staticmethod
    def for_condition(condition: str, details: str = "") -> _MessageBuilder:
        subject = f"{condition} {details}".strip()
        return _MessageBuilder(subject)

    @staticmethod
    def empty() -> "ConditionMessage":
        return ConditionMessage(())

    @staticmethod
    def of(messages: Iterable["ConditionMessage"]) -> "ConditionMessage":
        clauses: List[Clause] = []
        for message in messages:
            clauses.extend(message.clauses)
        return ConditionMessage(tuple(clauses))

    def and_then(self, other: "ConditionMessage") -> "ConditionMessage":
        return ConditionMessage(self.clauses + other.clauses)

    def is_empty(self) -> bool:
        return not self.clauses

    def __str__(self) -> str:
        return "; ".join(c.render() for c in self.clauses)


@dataclass(frozen=True)
class ConditionOutcome:
    """Decision of a condition plus its supporting evidence."""

    matched: bool
    clauses: Tuple[Clause, ...] = ()

    @classmethod
    def match(cls, message: ConditionMessage | None = None) -> "ConditionOutcome":
        return cls(True, message.clauses if message is not None else ())

    @classmethod
    def no_match(cls, message: ConditionMessage | None = None) -> "ConditionOutcome":
        return cls(False, message.clauses if message is not None else ())

    @classmethod
    def combine(cls, outcomes: Sequence["ConditionOutcome"]) -> "ConditionOutcome":
        """AND a set of outcomes: clauses of failures win when any failed."""
        failed = [o for o in outcomes if not o.matched]
        source = failed if failed else list(outcomes)
        clauses: List[Clause] = []
        for outcome in source:
            clauses.extend(outcome.clauses)
        return cls(not failed, tuple(clauses))

    @property
    def message(self) -> ConditionMessage:
        return ConditionMessage(self.clauses)

    def __str__(self) -> str:
        status = "matched" if self.matched else "did not match"
        text = str(self.message)
        return f"{status}: {text}" if text else status


__all__ = [
    "BECAUSE",
    "DID_NOT_FIND",
    "FOUND",
    "Clause",
    "ConditionMessage",
    "ConditionOutcome",
]
