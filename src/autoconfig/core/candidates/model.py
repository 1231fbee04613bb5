"""
Data model for configuration-module candidates.

A candidate is created when a module is discovered during collection and is
immutable afterwards; it only lives for one activation pass.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

from autoconfig.core.conditions.base import Condition
from autoconfig.core.exceptions import ConfigurationError

HIGHEST_PRECEDENCE = -(2**31)
LOWEST_PRECEDENCE = 2**31 - 1
DEFAULT_PRIORITY = 0


@dataclass(frozen=True)
class Candidate:
    """A configuration module that may be activated.

    Attributes:
        identity: Globally unique identifier (usually a dotted type path)
        priority: Lower values activate earlier (default 0)
        after: Identities this candidate must follow
        before: Identities this candidate must precede
        conditions: Conditions evaluated in declared order
        source: Where the candidate was declared (manifest path), if known
    """

    identity: str
    priority: int = DEFAULT_PRIORITY
    after: FrozenSet[str] = field(default_factory=frozenset)
    before: FrozenSet[str] = field(default_factory=frozenset)
    conditions: Tuple[Condition, ...] = ()
    source: Optional[str] = None

    def __post_init__(self) -> None:
        identity = str(self.identity or "").strip()
        if not identity:
            raise ConfigurationError("Candidate identity must not be empty", field="id")
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise ConfigurationError(
                f"Candidate priority must be an integer, got {self.priority!r}",
                candidate=identity,
                field="priority",
            )
        # Normalize collection fields so callers may pass lists/sets.
        object.__setattr__(self, "identity", identity)
        object.__setattr__(self, "after", _identity_set(self.after))
        object.__setattr__(self, "before", _identity_set(self.before))
        object.__setattr__(self, "conditions", tuple(self.conditions or ()))

    @property
    def has_edges(self) -> bool:
        return bool(self.after or self.before)


def _identity_set(values: Iterable[str] | None) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(str(v).strip() for v in values if str(v).strip())


__all__ = ["Candidate", "HIGHEST_PRECEDENCE", "LOWEST_PRECEDENCE", "DEFAULT_PRIORITY"]
