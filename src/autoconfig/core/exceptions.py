from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence


class AutoconfigError(Exception):
    """Base exception for the autoconfig engine."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(AutoconfigError, ValueError):
    """Raised for malformed declarative input. Aborts the activation pass."""

    def __init__(
        self,
        message: str = "",
        *,
        candidate: Optional[str] = None,
        field: Optional[str] = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if candidate:
            ctx["candidate"] = candidate
        if field:
            ctx["field"] = field
        AutoconfigError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.candidate = candidate
        self.field = field

    def __str__(self) -> str:
        base = super().__str__()
        where = []
        if self.candidate:
            where.append(f"candidate '{self.candidate}'")
        if self.field:
            where.append(f"field '{self.field}'")
        if not where:
            return base
        return f"{base} ({', '.join(where)})"

    def for_candidate(self, candidate: str) -> "ConfigurationError":
        """Attach the offending candidate identity if not already known."""
        if not self.candidate:
            self.candidate = candidate
            self.context["candidate"] = candidate
        return self


class OrderingCycleError(ConfigurationError):
    """Raised when after/before edges form a cycle."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle: List[str] = list(cycle)
        path = " -> ".join(self.cycle + self.cycle[:1])
        super().__init__(
            f"Cycle detected in candidate ordering: {path}",
            field="after/before",
            context={"cycle": list(self.cycle)},
        )


class ManifestError(ConfigurationError):
    """Raised when a candidate manifest cannot be read or fails validation."""


__all__ = [
    "AutoconfigError",
    "ConfigurationError",
    "OrderingCycleError",
    "ManifestError",
]
