from __future__ import annotations

import pytest

from autoconfig.core.conditions import PropertyMatchCondition, PropertySpec
from autoconfig.core.exceptions import ConfigurationError


def test_value_false_does_not_match_without_having_value(make_context) -> None:
    cond = PropertyMatchCondition.of(prefix="app", name="feature")
    outcome = cond.evaluate(make_context({"app.feature": "false"}))
    assert outcome.matched is False
    assert str(outcome.message) == "on_property (app.feature) found different value in property 'feature'"


def test_false_is_compared_case_insensitively(make_context) -> None:
    cond = PropertyMatchCondition.of(prefix="app", name="feature")
    assert cond.evaluate(make_context({"app.feature": "FALSE"})).matched is False
    assert cond.evaluate(make_context({"app.feature": "on"})).matched is True


def test_having_value_matches_case_insensitively(make_context) -> None:
    cond = PropertyMatchCondition.of(prefix="app", name="feature", having_value="true")
    outcome = cond.evaluate(make_context({"app.feature": "TRUE"}))
    assert outcome.matched is True
    assert str(outcome.message) == "on_property (app.feature=true) matched"


def test_having_value_mismatch(make_context) -> None:
    cond = PropertyMatchCondition.of(prefix="app", name="mode", having_value="fast")
    assert cond.evaluate(make_context({"app.mode": "slow"})).matched is False


def test_missing_property_respects_match_if_missing(make_context) -> None:
    lenient = PropertyMatchCondition.of(prefix="app", name="feature", match_if_missing=True)
    strict = PropertyMatchCondition.of(prefix="app", name="feature", match_if_missing=False)

    assert lenient.evaluate(make_context()).matched is True
    outcome = strict.evaluate(make_context())
    assert outcome.matched is False
    assert str(outcome.message) == "on_property (app.feature) did not find property 'feature'"


def test_prefix_trailing_dot_is_optional(make_context) -> None:
    spec = PropertySpec.of(prefix="app.", name="feature")
    assert spec.prefix == "app."
    assert PropertySpec.of(prefix="  app ", name="feature").prefix == "app."
    assert PropertySpec.of(name="feature").prefix == ""


def test_nested_sources_are_flattened(make_context) -> None:
    cond = PropertyMatchCondition.of(prefix="app", name="feature", having_value="true")
    assert cond.evaluate(make_context({"app": {"feature": True}})).matched is True


def test_several_names_report_every_missing_one(make_context) -> None:
    cond = PropertyMatchCondition.of(prefix="db", name=["url", "user", "password"])
    outcome = cond.evaluate(make_context({"db.user": "admin"}))
    assert outcome.matched is False
    assert str(outcome.message) == "on_property (db.[url, user, password]) did not find properties 'url', 'password'"


def test_multiple_specs_are_anded(make_context) -> None:
    cond = PropertyMatchCondition(
        PropertySpec.of(prefix="a", name="x"),
        PropertySpec.of(prefix="b", name="y", having_value="1"),
    )
    assert cond.evaluate(make_context({"a.x": "on", "b.y": "1"})).matched is True
    assert cond.evaluate(make_context({"a.x": "on", "b.y": "2"})).matched is False


def test_name_and_value_are_exclusive() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        PropertySpec.of(prefix="app", name="a", value="b")
    assert excinfo.value.field == "name"
    assert "exclusive" in str(excinfo.value)


def test_name_or_value_is_required() -> None:
    with pytest.raises(ConfigurationError, match="must be specified"):
        PropertySpec.of(prefix="app")


def test_value_is_an_alias_for_name(make_context) -> None:
    cond = PropertyMatchCondition.of(prefix="app", value="feature")
    assert cond.specs[0].names == ("feature",)
    assert cond.evaluate(make_context({"app.feature": "yes"})).matched is True


def test_from_mapping_reads_manifest_keys() -> None:
    spec = PropertySpec.from_mapping(
        {"prefix": "app", "name": "feature", "havingValue": True, "matchIfMissing": True}
    )
    assert spec == PropertySpec(prefix="app.", names=("feature",), having_value="True", match_if_missing=True)


@pytest.mark.parametrize("flag", ["false", "true", 0, None])
def test_from_mapping_rejects_non_boolean_match_if_missing(flag) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        PropertySpec.from_mapping({"name": "feature", "matchIfMissing": flag})
    assert excinfo.value.field == "matchIfMissing"
