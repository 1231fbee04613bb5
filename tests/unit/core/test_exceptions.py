from __future__ import annotations

from autoconfig.core.exceptions import AutoconfigError, ConfigurationError, ManifestError, OrderingCycleError


def test_configuration_error_is_value_error_and_names_location() -> None:
    err = ConfigurationError("bad input", candidate="app.Config", field="name")
    assert isinstance(err, ValueError)
    assert isinstance(err, AutoconfigError)
    assert str(err) == "bad input (candidate 'app.Config', field 'name')"
    assert err.to_json_error() == {
        "message": "bad input (candidate 'app.Config', field 'name')",
        "code": "ConfigurationError",
        "context": {"candidate": "app.Config", "field": "name"},
    }


def test_for_candidate_keeps_existing_candidate() -> None:
    err = ConfigurationError("x", candidate="first")
    assert err.for_candidate("second") is err
    assert err.candidate == "first"

    fresh = ConfigurationError("y").for_candidate("only")
    assert fresh.candidate == "only"
    assert fresh.context["candidate"] == "only"


def test_cycle_error_message_closes_the_loop() -> None:
    err = OrderingCycleError(["X", "Y"])
    assert err.cycle == ["X", "Y"]
    assert "X -> Y -> X" in str(err)
    assert isinstance(err, ConfigurationError)


def test_manifest_error_is_configuration_error() -> None:
    assert issubclass(ManifestError, ConfigurationError)
