"""Layered YAML configuration: bundled defaults, project file, environment."""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached
from .domains import ActivationConfig, LoggingConfig, RuntimeConfig
from .manager import ENV_PREFIX, ConfigManager

__all__ = [
    "ActivationConfig",
    "BaseDomainConfig",
    "ConfigManager",
    "ENV_PREFIX",
    "LoggingConfig",
    "RuntimeConfig",
    "clear_all_caches",
    "get_cached_config",
    "is_cached",
]
