from __future__ import annotations

from collections import OrderedDict

from autoconfig.core.environment import ImportTypeOracle, StaticTypeOracle, type_id_of


class Outer:
    class Inner:
        pass


def test_type_id_uses_module_and_qualname() -> None:
    assert type_id_of(OrderedDict) == "collections.OrderedDict"
    assert type_id_of(Outer.Inner).endswith("Outer.Inner")


def test_import_oracle_resolves_modules_and_attributes() -> None:
    oracle = ImportTypeOracle()
    assert oracle.resolve("collections.OrderedDict") is OrderedDict
    assert oracle.is_present("json")
    assert oracle.is_present("json.decoder.JSONDecoder")
    assert not oracle.is_present("json.NoSuchThing")
    assert not oracle.is_present("no_such_module_xyz")


def test_import_oracle_rejects_malformed_identifiers() -> None:
    oracle = ImportTypeOracle()
    for bad in ("", ".json", "json.", "json..decoder"):
        assert oracle.is_present(bad) is False


def test_import_oracle_caches_results() -> None:
    oracle = ImportTypeOracle()
    assert oracle.is_present("no_such_module_xyz") is False
    oracle._cache["no_such_module_xyz"] = object()
    assert oracle.is_present("no_such_module_xyz") is True
    oracle.clear()
    assert oracle.is_present("no_such_module_xyz") is False


def test_static_oracle() -> None:
    oracle = StaticTypeOracle(["a.A"])
    assert oracle.is_present("a.A")
    assert not oracle.is_present("b.B")
