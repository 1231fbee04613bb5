"""Property resolution over ordered property sources."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

_PLACEHOLDER = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


@runtime_checkable
class PropertyResolver(Protocol):
    def has_property(self, key: str) -> bool: ...

    def get_property(self, key: str) -> Optional[str]: ...

    def resolve_placeholders(self, text: str) -> str: ...


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_to_text(v) for v in value)
    return str(value)


def flatten_properties(data: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested mappings into dotted keys.

    Lists are exposed both joined (``key=a,b``) and indexed (``key[0]=a``).

    Example:
        >>> flatten_properties({"app": {"feature": True, "tags": ["a", "b"]}})
        {'app.feature': 'true', 'app.tags': 'a,b', 'app.tags[0]': 'a', 'app.tags[1]': 'b'}
    """
    out: Dict[str, str] = {}
    for raw_key, value in (data or {}).items():
        key = f"{prefix}{raw_key}"
        if isinstance(value, Mapping):
            out.update(flatten_properties(value, prefix=f"{key}."))
        elif isinstance(value, (list, tuple)):
            out[key] = _to_text(value)
            for i, item in enumerate(value):
                if isinstance(item, Mapping):
                    out.update(flatten_properties(item, prefix=f"{key}[{i}]."))
                else:
                    out[f"{key}[{i}]"] = _to_text(item)
        elif value is not None:
            out[key] = _to_text(value)
    return out


class MapPropertyResolver:
    """Resolve properties from ordered sources; the first source holding a key wins.

    Nested mappings are flattened to dotted keys on construction, so both
    ``{"app.feature": "on"}`` and ``{"app": {"feature": "on"}}`` work.
    """

    def __init__(self, *sources: Mapping[str, Any]) -> None:
        self._sources: List[Dict[str, str]] = [flatten_properties(s) for s in sources if s]

    @classmethod
    def from_sources(cls, sources: Sequence[Mapping[str, Any]]) -> "MapPropertyResolver":
        return cls(*sources)

    def has_property(self, key: str) -> bool:
        return any(key in source for source in self._sources)

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for source in self._sources:
            if key in source:
                return source[key]
        return default

    def resolve_placeholders(self, text: str) -> str:
        """Replace ``${key}`` / ``${key:default}``; unknown keys are left verbatim."""

        def _sub(match: re.Match[str]) -> str:
            key = match.group(1).strip()
            value = self.get_property(key)
            if value is not None:
                return value
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)

        return _PLACEHOLDER.sub(_sub, text or "")


__all__ = ["PropertyResolver", "MapPropertyResolver", "flatten_properties"]
