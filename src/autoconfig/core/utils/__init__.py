"""Shared helpers (YAML I/O, dictionary merging)."""
from __future__ import annotations

from .io import read_yaml
from .merge import deep_merge, merge_arrays

__all__ = ["read_yaml", "deep_merge", "merge_arrays"]
