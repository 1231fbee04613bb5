"""Deep merge used to layer configuration sources.

Lists in a higher layer replace the lower layer's list unless their first
element is one of the exact marker strings below:

  - ``"+"``: append the remaining items, skipping ones already present
  - ``"-"``: remove the remaining items from the lower layer's list
  - ``"="``: replace (same as no marker, but lets a list start with "+")

Only the bare marker counts. A first item such as ``"+app.A"`` is an
ordinary value.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

APPEND = "+"
REMOVE = "-"
REPLACE = "="


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``base`` with ``override`` layered on top; inputs are not mutated.

    Example:
        >>> deep_merge({"autoconfig": {"enabled": True}}, {"autoconfig": {"exclude": ["a"]}})
        {'autoconfig': {'enabled': True, 'exclude': ['a']}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        elif isinstance(value, list):
            merged[key] = merge_arrays(current if isinstance(current, list) else [], value)
        else:
            merged[key] = value
    return merged


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Combine two layers of a list setting.

    Example:
        >>> merge_arrays(["a.A"], ["b.B"])
        ['b.B']
        >>> merge_arrays(["a.A"], ["+", "a.A", "b.B"])
        ['a.A', 'b.B']
        >>> merge_arrays(["a.A", "b.B"], ["-", "a.A"])
        ['b.B']
    """
    marker = override[0] if override and isinstance(override[0], str) else None
    items = list(override[1:]) if marker in (APPEND, REMOVE, REPLACE) else list(override)
    if marker == APPEND:
        return list(base) + [item for i, item in enumerate(items) if item not in base and item not in items[:i]]
    if marker == REMOVE:
        return [item for item in base if item not in items]
    return items


__all__ = ["APPEND", "REMOVE", "REPLACE", "deep_merge", "merge_arrays"]
