"""
Configuration loading (YAML only).

Configuration sources (highest to lowest priority):
1. Environment variables: AUTOCONFIG_*
2. Explicit config files passed to the manager (later files win)
3. Project config: <repo_root>/autoconfig.yaml (or .yml)
4. Bundled defaults: autoconfig.data/config/defaults.yaml
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import yaml

from autoconfig.core.exceptions import ConfigurationError
from autoconfig.core.utils.io import read_yaml
from autoconfig.core.utils.merge import deep_merge
from autoconfig.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "AUTOCONFIG_"
PROJECT_CONFIG_FILES = ("autoconfig.yaml", "autoconfig.yml")


class ConfigManager:
    """Load and merge configuration layers."""

    ARRAY_APPEND_MARKER = object()

    def __init__(self, repo_root: Optional[Path] = None, config_paths: Sequence[Path] = ()) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()
        self.config_paths = [Path(p) for p in config_paths]
        self.defaults_path = get_data_path("config", "defaults.yaml")

    def project_config_path(self) -> Optional[Path]:
        for name in PROJECT_CONFIG_FILES:
            candidate = self.repo_root / name
            if candidate.exists():
                return candidate
        return None

    def sources(self) -> List[Path]:
        """Config files in merge order (lowest priority first)."""
        out = [self.defaults_path]
        project = self.project_config_path()
        if project is not None:
            out.append(project)
        out.extend(self.config_paths)
        return out

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Cannot read config file {path}: {exc}", field=str(path)) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping", field=str(path))
        return data

    def load_config(self, *, include_env: bool = True, strict_env: bool = False) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        for path in self.sources():
            cfg = deep_merge(cfg, self.load_yaml(path))
            logger.debug("Merged config layer %s", path)
        if include_env:
            self.apply_env_overrides(cfg, strict=strict_env)
        return cfg

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[Union[str, object]]:
        """``AUTOCONFIG_autoconfig__exclude__APPEND`` -> ["autoconfig", "exclude", APPEND]."""
        processed: List[Union[str, object]] = []
        for seg in raw.split("__"):
            if seg == "":
                if strict:
                    raise ValueError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
                return []
            if seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[Union[str, object]], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            path = self._parse_env_key(raw, strict=strict) if raw else []
            if not path:
                if strict:
                    raise ValueError(f"Malformed {ENV_PREFIX}* key: {key}")
                continue
            yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, object]], value: Any) -> None:
        cur: Any = root
        for part in path[:-1]:
            if part is self.ARRAY_APPEND_MARKER:
                raise ValueError("Invalid path: APPEND may only appear at leaf")
            if not isinstance(cur, dict):
                raise ValueError("Path traverses non-dict container")
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = lower_map.get(str(part), part)
            if key not in cur or not isinstance(cur[key], (dict, list)):
                cur[key] = [] if path[-1] is self.ARRAY_APPEND_MARKER and part == path[-2] else {}
            cur = cur[key]

        leaf = path[-1]
        if leaf is self.ARRAY_APPEND_MARKER:
            if not isinstance(cur, list):
                raise ValueError("APPEND requires list")
            cur.append(value)
            return
        if not isinstance(cur, dict):
            raise ValueError("Key assignment requires dict")
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[lower_map.get(str(leaf), leaf)] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool = False) -> None:
        for path, typed_value in self._iter_env_overrides(strict=strict):
            self._set_nested(cfg, path, typed_value)


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_FILES"]
