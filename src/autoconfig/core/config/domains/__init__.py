"""Domain-specific configuration accessors.

Each class extends BaseDomainConfig and provides typed, cached access to one
section of the resolved configuration:

- ActivationConfig: enable switch, exclusions, manifests, provider listings
- RuntimeConfig: runtime-mode marker identifiers
- LoggingConfig: log level and optional log file

Usage:
    from autoconfig.core.config.domains import ActivationConfig

    activation = ActivationConfig(repo_root=Path("/path/to/project"))
    manifests = activation.manifests
"""
from __future__ import annotations

from .activation import ActivationConfig
from .logging import LoggingConfig
from .runtime import RuntimeConfig

__all__ = ["ActivationConfig", "LoggingConfig", "RuntimeConfig"]
