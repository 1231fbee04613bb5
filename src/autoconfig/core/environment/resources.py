"""Resource locators used by resource-existence conditions."""
from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Iterable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

FILE_PREFIX = "file:"
PACKAGE_PREFIX = "package:"


@runtime_checkable
class ResourceLocator(Protocol):
    def exists(self, location: str) -> bool: ...


class FileSystemResourceLocator:
    """Locate resources on disk or inside importable packages.

    Supported forms:
      - ``path/to/file`` (relative to ``base_dir``, default: cwd)
      - ``file:/abs/or/relative/path``
      - ``package:some.package/relative/path`` via :mod:`importlib.resources`
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def exists(self, location: str) -> bool:
        loc = (location or "").strip()
        if not loc:
            return False
        try:
            if loc.startswith(PACKAGE_PREFIX):
                return self._package_resource_exists(loc[len(PACKAGE_PREFIX):])
            if loc.startswith(FILE_PREFIX):
                loc = loc[len(FILE_PREFIX):]
            return self._path(loc).exists()
        except (OSError, ValueError, ImportError, TypeError) as exc:
            logger.debug("Resource check for %s failed: %s", location, exc)
            return False

    def _path(self, loc: str) -> Path:
        path = Path(loc).expanduser()
        if not path.is_absolute():
            base = self.base_dir if self.base_dir is not None else Path.cwd()
            path = base / path
        return path

    @staticmethod
    def _package_resource_exists(spec: str) -> bool:
        package, _, rel = spec.lstrip("/").partition("/")
        if not package:
            return False
        root = resources.files(package)
        target = root.joinpath(rel) if rel else root
        return target.is_file() or target.is_dir()


class StaticResourceLocator:
    """Locator over a fixed set of known locations."""

    def __init__(self, locations: Iterable[str] = ()) -> None:
        self._locations = frozenset(locations)

    def exists(self, location: str) -> bool:
        return location in self._locations


__all__ = ["ResourceLocator", "FileSystemResourceLocator", "StaticResourceLocator"]
