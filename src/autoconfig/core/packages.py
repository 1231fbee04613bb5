"""Base package registry.

Entry points contribute "root search packages" used by structural scanning.
Contributions are merged into one insertion-ordered, deduplicated list. The
first :meth:`PackageScopeRegistry.get` logs a single diagnostic describing the
result; the flag guarding it belongs to the registry instance, so separate
registries (e.g. one per test) diagnose independently. Reading the registry
before any entry point registered is a configuration error.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from autoconfig.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def package_of(type_id: str) -> str:
    """Return the package part of a dotted identifier (``a.b.C`` -> ``a.b``)."""
    head, sep, _ = (type_id or "").strip().rpartition(".")
    return head if sep else ""


class PackageScopeRegistry:
    def __init__(self) -> None:
        self._packages: List[str] | None = None
        self.diagnosed = False

    @property
    def registered(self) -> bool:
        return self._packages is not None

    def register(self, *package_names: str | Iterable[str]) -> None:
        """Merge package names, keeping first-seen order; exact-match dedup.

        Accepts names as varargs or as iterables: ``register("a.b", "c.d")``
        and ``register(["a.b", "c.d"])`` are equivalent. Blank names are ignored.
        """
        if self._packages is None:
            self._packages = []
        for name in self._flatten(package_names):
            if name not in self._packages:
                self._packages.append(name)

    def register_for(self, type_id: str) -> None:
        """Register the package that contains ``type_id``."""
        self.register(package_of(type_id))

    def has(self) -> bool:
        """True when packages were registered and at least one is non-blank."""
        return bool(self._packages)

    def get(self) -> List[str]:
        """Return the registered packages.

        Raises:
            ConfigurationError: If nothing was ever registered. Registering
                only blank names is allowed and yields an empty list.
        """
        if self._packages is None:
            raise ConfigurationError(
                "Unable to retrieve base packages: no entry point registered any",
                field="packages",
            )
        packages = list(self._packages)
        if not self.diagnosed:
            if not packages:
                logger.warning(
                    "Auto-configuration was enabled from a module without a package. "
                    "Package-scoped scanning is not enabled."
                )
            else:
                logger.info(
                    "Auto-configuration was enabled from package(s) '%s'. "
                    "Package-scoped scanning is enabled.",
                    ", ".join(packages),
                )
            self.diagnosed = True
        return packages

    @staticmethod
    def _flatten(values: Iterable[str | Iterable[str]]) -> Iterable[str]:
        for value in values:
            if isinstance(value, str):
                items: Iterable[str] = [value]
            else:
                items = value
            for item in items:
                text = str(item) if item is not None else ""
                if text.strip():
                    yield text


__all__ = ["PackageScopeRegistry", "package_of"]
