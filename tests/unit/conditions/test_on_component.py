from __future__ import annotations

import pytest

from autoconfig.core.conditions import ComponentAbsenceCondition, ComponentPresenceCondition
from autoconfig.core.environment import ScopedComponentRegistry, SearchScope
from autoconfig.core.environment.context import EvaluationContext
from autoconfig.core.exceptions import ConfigurationError


class DataSource:
    pass


class PooledDataSource(DataSource):
    pass


DS = f"{DataSource.__module__}.DataSource"


@pytest.fixture
def hierarchy() -> ScopedComponentRegistry:
    root = ScopedComponentRegistry("root")
    root.register_instance("dataSource", PooledDataSource())
    child = root.child("web")
    child.register("dispatcher", ["app.web.Dispatcher"])
    return child


def test_presence_by_type_searches_all_levels(hierarchy, make_context) -> None:
    cond = ComponentPresenceCondition(type_id=DS)
    outcome = cond.evaluate(make_context(registry=hierarchy))
    assert outcome.matched is True
    assert "'dataSource'" in str(outcome.message)


def test_current_scope_ignores_ancestors(hierarchy, make_context) -> None:
    ctx = make_context(registry=hierarchy)
    assert ComponentPresenceCondition(type_id=DS, scope="current").evaluate(ctx).matched is False
    assert ComponentPresenceCondition(name="dispatcher", scope="current").evaluate(ctx).matched is True


def test_ancestors_scope_skips_current_level(hierarchy, make_context) -> None:
    ctx = make_context(registry=hierarchy)
    assert ComponentPresenceCondition(name="dispatcher", scope=SearchScope.ANCESTORS).evaluate(ctx).matched is False
    assert ComponentPresenceCondition(name="dataSource", scope=SearchScope.ANCESTORS).evaluate(ctx).matched is True


def test_ancestors_scope_on_root_is_empty(make_context) -> None:
    root = ScopedComponentRegistry()
    root.register("x", ["a.X"])
    ctx = make_context(registry=root)
    outcome = ComponentAbsenceCondition(type_id="a.X", scope="ancestors").evaluate(ctx)
    assert outcome.matched is True
    assert str(outcome.message) == "on_missing_component (types: a.X; search: ancestors) did not find any components"


def test_type_and_name_filters_are_combined(hierarchy, make_context) -> None:
    ctx = make_context(registry=hierarchy)
    assert ComponentPresenceCondition(type_id=DS, name="dataSource").evaluate(ctx).matched is True
    assert ComponentPresenceCondition(type_id=DS, name="dispatcher").evaluate(ctx).matched is False


def test_absence_fails_when_component_exists(hierarchy, make_context) -> None:
    outcome = ComponentAbsenceCondition(name="dispatcher").evaluate(make_context(registry=hierarchy))
    assert outcome.matched is False
    assert "found component 'dispatcher'" in str(outcome.message)


def test_registry_failure_counts_as_empty() -> None:
    class _Broken:
        def find(self, type_id=None, name=None, scope=SearchScope.ALL):
            raise LookupError("scope gone")

    ctx = EvaluationContext(registry=_Broken())
    assert ComponentPresenceCondition(name="x").evaluate(ctx).matched is False
    assert ComponentAbsenceCondition(name="x").evaluate(ctx).matched is True


def test_type_or_name_is_required() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        ComponentPresenceCondition()
    assert excinfo.value.field == "type"


def test_unknown_scope_is_rejected() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        ComponentPresenceCondition(name="x", scope="sideways")
    assert excinfo.value.field == "search"
