from __future__ import annotations

from autoconfig.core.environment import MapPropertyResolver, flatten_properties


def test_flatten_nested_mapping_and_lists() -> None:
    flat = flatten_properties({"app": {"feature": True, "tags": ["a", "b"], "port": 8080, "unset": None}})
    assert flat == {
        "app.feature": "true",
        "app.tags": "a,b",
        "app.tags[0]": "a",
        "app.tags[1]": "b",
        "app.port": "8080",
    }


def test_first_source_wins() -> None:
    resolver = MapPropertyResolver({"app.name": "override"}, {"app": {"name": "default", "extra": "x"}})
    assert resolver.get_property("app.name") == "override"
    assert resolver.get_property("app.extra") == "x"
    assert resolver.get_property("app.missing") is None
    assert resolver.get_property("app.missing", "fallback") == "fallback"
    assert resolver.has_property("app.extra")
    assert not resolver.has_property("app")


def test_placeholders() -> None:
    resolver = MapPropertyResolver({"home": "/srv/app"})
    assert resolver.resolve_placeholders("${home}/conf") == "/srv/app/conf"
    assert resolver.resolve_placeholders("${missing:/etc}/conf") == "/etc/conf"
    assert resolver.resolve_placeholders("${missing}/conf") == "${missing}/conf"
    assert resolver.resolve_placeholders("plain") == "plain"


def test_from_sources_skips_empty_sources() -> None:
    resolver = MapPropertyResolver.from_sources([{}, {"a": 1}])
    assert resolver.get_property("a") == "1"
