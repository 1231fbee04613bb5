from __future__ import annotations

import logging

import pytest

from autoconfig.core.candidates import HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, Candidate, OrderingResolver, resolve
from autoconfig.core.exceptions import ConfigurationError, OrderingCycleError


def test_after_edge_orders_dependency_first() -> None:
    assert resolve([Candidate("A"), Candidate("B", after=["A"])]) == ["A", "B"]
    assert resolve([Candidate("B", after=["A"]), Candidate("A")]) == ["A", "B"]


def test_priority_orders_unconstrained_candidates() -> None:
    order = resolve([Candidate("late", priority=10), Candidate("early", priority=-10), Candidate("mid")])
    assert order == ["early", "mid", "late"]


def test_discovery_order_breaks_priority_ties() -> None:
    assert resolve([Candidate("z"), Candidate("a"), Candidate("m")]) == ["z", "a", "m"]


def test_edges_beat_priority() -> None:
    order = resolve(
        [
            Candidate("A", priority=HIGHEST_PRECEDENCE, after=["B"]),
            Candidate("B", priority=LOWEST_PRECEDENCE),
        ]
    )
    assert order == ["B", "A"]


def test_before_edge() -> None:
    assert resolve([Candidate("A"), Candidate("B", before=["A"])]) == ["B", "A"]


def test_edges_only_move_constrained_candidates() -> None:
    order = resolve(
        [
            Candidate("first", priority=-5),
            Candidate("web", after=["server"]),
            Candidate("other", priority=1),
            Candidate("server", priority=2),
        ]
    )
    assert order == ["first", "other", "server", "web"]


def test_edges_to_unknown_candidates_are_ignored(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="autoconfig.core.candidates.ordering"):
        order = resolve([Candidate("A", after=["missing.Config"]), Candidate("B", before=["gone"])])
    assert order == ["A", "B"]
    assert "missing.Config" in caplog.text


def test_two_node_cycle_is_fatal() -> None:
    with pytest.raises(OrderingCycleError) as excinfo:
        resolve([Candidate("X", after=["Y"]), Candidate("Y", after=["X"])])
    assert set(excinfo.value.cycle) == {"X", "Y"}
    assert "X" in str(excinfo.value) and "Y" in str(excinfo.value)


def test_cycle_error_names_only_cycle_members() -> None:
    candidates = [
        Candidate("root"),
        Candidate("a", after=["root", "c"]),
        Candidate("b", after=["a"]),
        Candidate("c", after=["b"]),
        Candidate("tail", after=["c"]),
    ]
    with pytest.raises(OrderingCycleError) as excinfo:
        resolve(candidates)
    assert sorted(excinfo.value.cycle) == ["a", "b", "c"]


def test_self_edge_is_a_cycle() -> None:
    with pytest.raises(OrderingCycleError) as excinfo:
        resolve([Candidate("A", after=["A"])])
    assert excinfo.value.cycle == ["A"]


def test_duplicate_identity_is_rejected() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        resolve([Candidate("A"), Candidate("A")])
    assert excinfo.value.field == "id"


def test_resolution_is_deterministic() -> None:
    candidates = [
        Candidate("c", priority=1),
        Candidate("a", after=["c"]),
        Candidate("b", before=["a"]),
        Candidate("d"),
    ]
    resolver = OrderingResolver()
    first = resolver.resolve(candidates)
    assert all(resolver.resolve(candidates) == first for _ in range(5))
    assert first.index("c") < first.index("a")
    assert first.index("b") < first.index("a")


def test_candidate_validation() -> None:
    with pytest.raises(ConfigurationError):
        Candidate("  ")
    with pytest.raises(ConfigurationError) as excinfo:
        Candidate("A", priority="high")  # type: ignore[arg-type]
    assert excinfo.value.field == "priority"
    c = Candidate(" A ", after="B", before=["C", " "])
    assert c.identity == "A"
    assert c.after == frozenset({"B"})
    assert c.before == frozenset({"C"})
    assert c.has_edges
