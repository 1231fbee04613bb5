from __future__ import annotations

import logging

import pytest

from autoconfig.core.candidates import Candidate
from autoconfig.core.conditions import (
    Condition,
    PropertyMatchCondition,
    ResourceExistsCondition,
    TypePresenceCondition,
)
from autoconfig.core.evaluation import ActivationPass, ConditionEvaluator
from autoconfig.core.exceptions import ConfigurationError, OrderingCycleError
from autoconfig.core.outcome import ConditionOutcome


class _Counting(Condition):
    kind = "counting"

    def __init__(self, matched: bool = True) -> None:
        self.matched = matched
        self.calls = 0

    def evaluate(self, context):
        self.calls += 1
        return ConditionOutcome(self.matched)


class _Misconfigured(Condition):
    kind = "misconfigured"

    def evaluate(self, context):
        raise ConfigurationError("bad declaration", field="types")


def _candidates():
    return [
        Candidate("app.Web", after=["app.Server"], conditions=[TypePresenceCondition(["web.Framework"])]),
        Candidate("app.Server", priority=-10),
        Candidate("app.Feature", conditions=[PropertyMatchCondition.of(prefix="app", name="feature")]),
        Candidate("app.Files", conditions=[ResourceExistsCondition(["conf/app.yaml"])]),
    ]


def test_evaluator_stops_at_first_failure(make_context) -> None:
    failing, never = _Counting(matched=False), _Counting()
    outcome = ConditionEvaluator().evaluate(Candidate("a", conditions=[failing, never]), make_context())
    assert outcome.matched is False
    assert (failing.calls, never.calls) == (1, 0)


def test_candidate_without_conditions_matches(make_context) -> None:
    outcome = ConditionEvaluator().evaluate(Candidate("a"), make_context())
    assert outcome.matched is True


def test_pass_orders_and_filters(make_context) -> None:
    ctx = make_context({"app.feature": "false"}, types=["web.Framework"], resources=["conf/app.yaml"])
    result = ActivationPass(_candidates(), ctx).run()

    assert result.order == ["app.Server", "app.Web", "app.Feature", "app.Files"]
    assert result.activated == ["app.Server", "app.Web", "app.Files"]
    assert result.outcomes["app.Feature"].matched is False
    assert result.enabled is True


def test_pass_is_idempotent(make_context) -> None:
    ctx = make_context({"app.feature": "true"}, types=["web.Framework"])
    activation = ActivationPass(_candidates(), ctx)
    assert activation.run() == activation.run()


def test_exclusions_from_argument_and_property(make_context) -> None:
    ctx = make_context({"autoconfig.exclude": "app.Files, app.Unknown"}, types=["web.Framework"])
    result = ActivationPass(_candidates(), ctx, exclude=["app.Server"]).run()

    assert result.excluded == ["app.Server", "app.Files"]
    assert "app.Server" not in result.order
    assert "app.Files" not in result.outcomes
    # Edges to excluded candidates no longer constrain the order.
    assert result.order == ["app.Web", "app.Feature"]


def test_excluded_candidates_are_never_evaluated(make_context) -> None:
    counting = _Counting()
    candidates = [Candidate("a", conditions=[counting])]
    ActivationPass(candidates, make_context(), exclude=["a"]).run()
    assert counting.calls == 0


def test_disabled_pass_activates_nothing(make_context, caplog: pytest.LogCaptureFixture) -> None:
    ctx = make_context({"autoconfig.enabled": "FALSE"})
    with caplog.at_level(logging.INFO, logger="autoconfig.core.evaluation"):
        result = ActivationPass(_candidates(), ctx).run()
    assert result.enabled is False
    assert result.activated == []
    assert "disabled" in caplog.text


def test_enabled_argument_overrides_property(make_context) -> None:
    ctx = make_context({"autoconfig.enabled": "false"})
    result = ActivationPass([Candidate("a")], ctx, enabled=True).run()
    assert result.activated == ["a"]


def test_configuration_error_aborts_and_names_candidate(make_context) -> None:
    candidates = [Candidate("ok"), Candidate("broken", conditions=[_Misconfigured()])]
    with pytest.raises(ConfigurationError) as excinfo:
        ActivationPass(candidates, make_context()).run()
    assert excinfo.value.candidate == "broken"


def test_cycle_aborts_the_pass(make_context) -> None:
    candidates = [Candidate("X", after=["Y"]), Candidate("Y", after=["X"])]
    with pytest.raises(OrderingCycleError):
        ActivationPass(candidates, make_context()).run()


def test_runtime_mode_is_deduced_once_per_context(make_context) -> None:
    ctx = make_context(types=["aiohttp.web.Application"])
    assert ctx.runtime_mode is ctx.runtime_mode
