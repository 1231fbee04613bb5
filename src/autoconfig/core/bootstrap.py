"""
Wire configuration into an activation pass.

``run_activation`` is the config-driven entry point: it resolves the layered
configuration, applies its ``logging`` section, loads the configured manifests, adds provider-listed
identities that no manifest declares (unconditional, default priority),
builds one EvaluationContext and runs the pass.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from autoconfig.core.candidates.model import Candidate
from autoconfig.core.candidates.registry import CandidateRegistry
from autoconfig.core.conditions.registry import ConditionKindRegistry
from autoconfig.core.config.cache import get_cached_config
from autoconfig.core.config.domains import ActivationConfig, LoggingConfig, RuntimeConfig
from autoconfig.core.environment.context import EvaluationContext
from autoconfig.core.environment.properties import MapPropertyResolver
from autoconfig.core.environment.registry import ComponentRegistry
from autoconfig.core.environment.resources import FileSystemResourceLocator, ResourceLocator
from autoconfig.core.environment.types import ImportTypeOracle, TypePresenceOracle
from autoconfig.core.evaluation import ActivationPass, ActivationResult
from autoconfig.core.runtime import ContextType
from autoconfig.core.stdlib_logging import configure_logging_from_config

logger = logging.getLogger(__name__)


def create_context(
    config: Mapping[str, Any],
    *,
    properties: Sequence[Mapping[str, Any]] = (),
    registry: Optional[ComponentRegistry] = None,
    types: Optional[TypePresenceOracle] = None,
    resources: Optional[ResourceLocator] = None,
    application_type: Optional[ContextType] = None,
    repo_root: Optional[Path] = None,
) -> EvaluationContext:
    """Build the shared context for one pass.

    Explicit property sources take precedence over the resolved
    configuration, which is always the last property source.
    """
    resolver = MapPropertyResolver(*properties, config)
    kwargs: dict = {
        "properties": resolver,
        "resources": resources or FileSystemResourceLocator(repo_root),
        "types": types or ImportTypeOracle(),
        "markers": RuntimeConfig(repo_root, config=config).markers,
        "application_type": application_type,
    }
    if registry is not None:
        kwargs["registry"] = registry
    return EvaluationContext(**kwargs)


def collect_candidates(
    activation: ActivationConfig,
    *,
    kinds: Optional[ConditionKindRegistry] = None,
) -> CandidateRegistry:
    candidates = CandidateRegistry()
    for path in activation.manifests:
        candidates.load_manifest(path, kinds=kinds)
    if activation.factories_path:
        for identity in activation.provider().list_candidates(activation.marker_key):
            if identity not in candidates:
                candidates.add(Candidate(identity))
    return candidates


def run_activation(
    repo_root: Optional[Path] = None,
    *,
    config: Optional[Mapping[str, Any]] = None,
    properties: Sequence[Mapping[str, Any]] = (),
    registry: Optional[ComponentRegistry] = None,
    types: Optional[TypePresenceOracle] = None,
    resources: Optional[ResourceLocator] = None,
    application_type: Optional[ContextType] = None,
    kinds: Optional[ConditionKindRegistry] = None,
    configure_logs: bool = True,
) -> ActivationResult:
    """Run one activation pass for the project at ``repo_root``.

    The ``logging`` section is applied first unless ``configure_logs`` is
    false. A false ``autoconfig.enabled`` in the configuration disables the
    pass outright; otherwise property sources may still switch it off.
    """
    cfg = config if config is not None else get_cached_config(repo_root=repo_root)
    if configure_logs:
        configure_logging_from_config(LoggingConfig(repo_root, config=cfg))
    activation = ActivationConfig(repo_root, config=cfg)
    candidates = collect_candidates(activation, kinds=kinds)
    context = create_context(
        cfg,
        properties=properties,
        registry=registry,
        types=types,
        resources=resources,
        application_type=application_type,
        repo_root=repo_root,
    )
    logger.debug("Collected %d candidate(s) for activation", len(candidates))
    return ActivationPass(
        candidates,
        context,
        exclude=activation.exclude,
        enabled=None if activation.enabled else False,
    ).run()


__all__ = ["collect_candidates", "create_context", "run_activation"]
