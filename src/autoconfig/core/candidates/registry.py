from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional

from autoconfig.core.exceptions import ConfigurationError

from .model import Candidate

if TYPE_CHECKING:
    from autoconfig.core.conditions.registry import ConditionKindRegistry

logger = logging.getLogger(__name__)


class CandidateRegistry:
    """Discovered candidates, kept in discovery order.

    Populated during the collection phase only; evaluation reads it afterwards.
    """

    def __init__(self, candidates: Iterable[Candidate] = ()) -> None:
        self._candidates: Dict[str, Candidate] = {}
        self.add_all(candidates)

    def add(self, candidate: Candidate) -> None:
        existing = self._candidates.get(candidate.identity)
        if existing is not None:
            raise ConfigurationError(
                "Duplicate candidate identity"
                + (f" (already declared in {existing.source})" if existing.source else ""),
                candidate=candidate.identity,
                field="id",
            )
        self._candidates[candidate.identity] = candidate

    def add_all(self, candidates: Iterable[Candidate]) -> None:
        for candidate in candidates:
            self.add(candidate)

    def load_manifest(self, path: Path, kinds: Optional["ConditionKindRegistry"] = None) -> List[Candidate]:
        """Parse a YAML manifest and add its candidates; returns what was added."""
        from .manifest import load_manifest

        loaded = load_manifest(path, kinds=kinds)
        self.add_all(loaded)
        logger.debug("Loaded %d candidate(s) from %s", len(loaded), path)
        return loaded

    def get(self, identity: str) -> Optional[Candidate]:
        return self._candidates.get(identity)

    def identities(self) -> List[str]:
        return list(self._candidates)

    def __contains__(self, identity: object) -> bool:
        return identity in self._candidates

    def __iter__(self) -> Iterator[Candidate]:
        return iter(list(self._candidates.values()))

    def __len__(self) -> int:
        return len(self._candidates)


__all__ = ["CandidateRegistry"]
