from __future__ import annotations

from pathlib import Path

from autoconfig.core.candidates import CONFIGURATION_MODULE_KEY
from autoconfig.core.config import ActivationConfig, LoggingConfig, RuntimeConfig
from autoconfig.core.runtime import RuntimeMarkers


def test_activation_config(tmp_path: Path) -> None:
    cfg = ActivationConfig(
        tmp_path,
        config={
            "autoconfig": {
                "enabled": "false",
                "exclude": "app.A, app.B",
                "manifests": ["manifests/web.yaml", "/abs/other.yaml"],
                "factories": "factories.yaml",
            }
        },
    )
    assert cfg.enabled is False
    assert cfg.exclude == ["app.A", "app.B"]
    assert cfg.manifests == [tmp_path / "manifests/web.yaml", Path("/abs/other.yaml")]
    assert cfg.factories_path == [tmp_path / "factories.yaml"]
    assert cfg.marker_key == CONFIGURATION_MODULE_KEY
    assert cfg.provider().paths == [tmp_path / "factories.yaml"]


def test_activation_config_defaults_from_project(tmp_path: Path) -> None:
    cfg = ActivationConfig(tmp_path)
    assert cfg.enabled is True
    assert cfg.exclude == []
    assert cfg.manifests == []


def test_missing_section_is_empty(tmp_path: Path) -> None:
    cfg = ActivationConfig(tmp_path, config={})
    assert cfg.section == {}
    assert cfg.enabled is True


def test_runtime_config_markers(tmp_path: Path) -> None:
    cfg = RuntimeConfig(tmp_path, config={"runtime": {"markers": {"jersey": "hug.API"}}})
    assert cfg.markers == RuntimeMarkers(jersey="hug.API")
    assert RuntimeConfig(tmp_path).markers == RuntimeMarkers()


def test_logging_config(tmp_path: Path) -> None:
    cfg = LoggingConfig(tmp_path, config={"logging": {"level": "debug", "path": ""}})
    assert cfg.level == "DEBUG"
    assert cfg.path is None
    cfg = LoggingConfig(tmp_path, config={"logging": {"path": "logs/run.log"}})
    assert cfg.level == "INFO"
    assert cfg.path == tmp_path / "logs/run.log"
