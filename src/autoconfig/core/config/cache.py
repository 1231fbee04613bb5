"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys fingerprint the AUTOCONFIG_* environment and the project
config file so long-running processes and tests never see stale values.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return Path.cwd().resolve()
    return Path(repo_root).expanduser().resolve()


def _file_fingerprint(path: Path) -> tuple[str, int, int]:
    try:
        st = path.stat()
    except OSError:
        return (str(path), 0, 0)
    return (str(path), int(st.st_mtime_ns), int(st.st_size))


def _cache_key(repo_root: Path, config_paths: Sequence[Path] = ()) -> str:
    from .manager import ENV_PREFIX, PROJECT_CONFIG_FILES

    env_items = sorted(
        (k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = [repo_root / name for name in PROJECT_CONFIG_FILES] + [Path(p) for p in config_paths]
    cfg_fp = hashlib.sha256(
        repr([_file_fingerprint(p) for p in files]).encode("utf-8")
    ).hexdigest()[:12]
    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(
    repo_root: Optional[Path] = None,
    config_paths: Sequence[Path] = (),
) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same repo_root, config
    files and environment, avoiding repeated file I/O.
    """
    from .manager import ConfigManager

    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root, config_paths)
    if key not in _config_cache:
        manager = ConfigManager(repo_root=normalized_root, config_paths=config_paths)
        _config_cache[key] = manager.load_config()
    # NOTE: returns the cached dict instance (treat as immutable)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Drop every cached config dict."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, config_paths: Sequence[Path] = ()) -> bool:
    return _cache_key(_normalize_repo_root(repo_root), config_paths) in _config_cache


__all__ = [
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
]
