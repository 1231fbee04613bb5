"""Deterministic activation ordering.

Candidates are first ranked by ``(priority, discovery index)``. The
``after``/``before`` edges are then enforced as hard constraints by a stable
topological sort (Kahn's algorithm) whose ready queue always emits the
lowest-ranked candidate. Candidates without edge constraints therefore keep
their priority-derived position, and edges win over priority when they
conflict.
"""
from __future__ import annotations

import heapq
import logging
from typing import Dict, Iterable, List, Set, Tuple

from autoconfig.core.exceptions import ConfigurationError, OrderingCycleError

from .model import Candidate

logger = logging.getLogger(__name__)


class OrderingResolver:
    def resolve(self, candidates: Iterable[Candidate]) -> List[str]:
        """Return candidate identities in activation order.

        Raises:
            OrderingCycleError: If after/before edges form a cycle
            ConfigurationError: If two candidates share an identity
        """
        items = list(candidates)
        rank = self._rank(items)
        successors, indegree = self._edges(items, rank)

        ready: List[Tuple[int, str]] = [(rank[c.identity], c.identity) for c in items if indegree[c.identity] == 0]
        heapq.heapify(ready)
        order: List[str] = []
        while ready:
            _, identity = heapq.heappop(ready)
            order.append(identity)
            for nxt in successors[identity]:
                indegree[nxt] -= 1
                if indegree[nxt] == 0:
                    heapq.heappush(ready, (rank[nxt], nxt))

        if len(order) != len(items):
            remaining = {i for i, d in indegree.items() if d > 0}
            raise OrderingCycleError(self._find_cycle(remaining, successors, rank))
        return order

    @staticmethod
    def _rank(items: List[Candidate]) -> Dict[str, int]:
        seen: Set[str] = set()
        for c in items:
            if c.identity in seen:
                raise ConfigurationError("Duplicate candidate identity", candidate=c.identity, field="id")
            seen.add(c.identity)
        seeded = sorted(range(len(items)), key=lambda i: (items[i].priority, i))
        return {items[i].identity: pos for pos, i in enumerate(seeded)}

    @staticmethod
    def _edges(
        items: List[Candidate], rank: Dict[str, int]
    ) -> Tuple[Dict[str, List[str]], Dict[str, int]]:
        pairs: Set[Tuple[str, str]] = set()
        for c in items:
            for other in c.after:
                if other in rank:
                    pairs.add((other, c.identity))
                else:
                    logger.debug("%s: ignoring after-edge to unknown candidate %s", c.identity, other)
            for other in c.before:
                if other in rank:
                    pairs.add((c.identity, other))
                else:
                    logger.debug("%s: ignoring before-edge to unknown candidate %s", c.identity, other)

        successors: Dict[str, List[str]] = {c.identity: [] for c in items}
        indegree: Dict[str, int] = {c.identity: 0 for c in items}
        for src, dst in sorted(pairs, key=lambda p: (rank[p[0]], rank[p[1]])):
            if src == dst:
                raise OrderingCycleError([src])
            successors[src].append(dst)
            indegree[dst] += 1
        return successors, indegree

    @staticmethod
    def _find_cycle(
        remaining: Set[str], successors: Dict[str, List[str]], rank: Dict[str, int]
    ) -> List[str]:
        # Every leftover node still has a leftover predecessor, so walking
        # predecessors from any of them must revisit a node.
        predecessors: Dict[str, List[str]] = {n: [] for n in remaining}
        for src, dsts in successors.items():
            if src not in remaining:
                continue
            for dst in dsts:
                if dst in remaining:
                    predecessors[dst].append(src)

        node = min(remaining, key=lambda n: rank[n])
        path: List[str] = []
        index: Dict[str, int] = {}
        while node not in index:
            index[node] = len(path)
            path.append(node)
            node = min(predecessors[node], key=lambda n: rank[n])
        cycle = path[index[node]:]
        cycle.reverse()
        return cycle


def resolve(candidates: Iterable[Candidate]) -> List[str]:
    return OrderingResolver().resolve(candidates)


__all__ = ["OrderingResolver", "resolve"]
