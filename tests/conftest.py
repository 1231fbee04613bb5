from __future__ import annotations

import os
import sys
import textwrap
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'autoconfig'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from autoconfig.core.config.cache import clear_all_caches
from autoconfig.core.environment import (
    MapPropertyResolver,
    ScopedComponentRegistry,
    StaticResourceLocator,
    StaticTypeOracle,
)
from autoconfig.core.environment.context import EvaluationContext
from autoconfig.core.stdlib_logging import reset_logging_for_tests


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch: pytest.MonkeyPatch) -> Iterable[None]:
    """Drop AUTOCONFIG_* variables and cached config around every test."""
    for key in list(os.environ):
        if key.startswith("AUTOCONFIG_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()
    reset_logging_for_tests()


@pytest.fixture
def make_context() -> Callable[..., EvaluationContext]:
    """Build an EvaluationContext from plain data (static oracles only)."""

    def _make(
        properties: Mapping[str, Any] | None = None,
        types: Iterable[str] = (),
        resources: Iterable[str] = (),
        registry: ScopedComponentRegistry | None = None,
        **kwargs: Any,
    ) -> EvaluationContext:
        return EvaluationContext(
            properties=MapPropertyResolver(properties or {}),
            types=StaticTypeOracle(types),
            resources=StaticResourceLocator(resources),
            registry=registry or ScopedComponentRegistry(),
            **kwargs,
        )

    return _make


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write dedented YAML text under tmp_path and return the file path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return path

    return _write
