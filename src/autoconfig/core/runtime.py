"""
Runtime mode deduction.

The runtime mode is the category of application being started. It is deduced
either from environment signals (which marker types are resolvable) or from a
known application context type and its ancestors.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Tuple, Union

from autoconfig.core.environment.types import (
    ImportTypeOracle,
    TypePresenceOracle,
    is_type_present,
    type_id_of,
)
from autoconfig.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class RuntimeMode(str, Enum):
    NONE = "none"
    SERVLET = "servlet"
    REACTIVE = "reactive"

    @classmethod
    def parse(cls, value: "str | RuntimeMode") -> "RuntimeMode":
        if isinstance(value, RuntimeMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown runtime mode {value!r} (expected none, servlet or reactive)",
                field="mode",
            ) from None


class ServletApplicationContext:
    """Marker base for synchronous (request/thread) application contexts."""


class ReactiveApplicationContext:
    """Marker base for event-loop driven application contexts."""


@dataclass(frozen=True)
class RuntimeMarkers:
    """Type identifiers that signal which runtime mode is in use."""

    reactive: str = "aiohttp.web.Application"
    mvc: str = "flask.Flask"
    jersey: str = "falcon.App"
    servlet: Tuple[str, ...] = ("werkzeug.wrappers.Request", "werkzeug.serving.BaseWSGIServer")
    servlet_context_base: str = type_id_of(ServletApplicationContext)
    reactive_context_base: str = type_id_of(ReactiveApplicationContext)

    @classmethod
    def from_mapping(cls, data: Optional[dict]) -> "RuntimeMarkers":
        data = data or {}
        defaults = cls()
        servlet = data.get("servlet", defaults.servlet)
        if isinstance(servlet, str):
            servlet = [servlet]
        return cls(
            reactive=str(data.get("reactive", defaults.reactive)),
            mvc=str(data.get("mvc", defaults.mvc)),
            jersey=str(data.get("jersey", defaults.jersey)),
            servlet=tuple(str(s) for s in servlet),
            servlet_context_base=str(data.get("servletContextBase", defaults.servlet_context_base)),
            reactive_context_base=str(data.get("reactiveContextBase", defaults.reactive_context_base)),
        )


def deduce_from_environment(
    oracle: TypePresenceOracle, markers: RuntimeMarkers = RuntimeMarkers()
) -> RuntimeMode:
    """Deduce the mode from which marker types resolve; a failing check counts as absent."""
    if (
        is_type_present(oracle, markers.reactive)
        and not is_type_present(oracle, markers.mvc)
        and not is_type_present(oracle, markers.jersey)
    ):
        return RuntimeMode.REACTIVE
    for type_id in markers.servlet:
        if not is_type_present(oracle, type_id):
            return RuntimeMode.NONE
    return RuntimeMode.SERVLET


ContextType = Union[type, str, Iterable[str]]


def _ancestor_ids(context_type: ContextType) -> Optional[Tuple[str, ...]]:
    if isinstance(context_type, type):
        return tuple(type_id_of(c) for c in context_type.__mro__)
    if isinstance(context_type, str):
        resolved: Any = ImportTypeOracle().resolve(context_type)
        if not isinstance(resolved, type):
            return None
        return tuple(type_id_of(c) for c in resolved.__mro__)
    return tuple(str(t) for t in context_type)


def deduce_from_type(
    context_type: ContextType, markers: RuntimeMarkers = RuntimeMarkers()
) -> RuntimeMode:
    """Deduce the mode from an application context type or its ancestor chain.

    ``context_type`` may be a class, a dotted identifier of a class, or the
    already-known ancestor chain as identifiers. Unresolvable input yields NONE.
    """
    try:
        chain = _ancestor_ids(context_type)
    except TypeError as exc:
        logger.debug("Cannot inspect context type %r: %s", context_type, exc)
        return RuntimeMode.NONE
    if not chain:
        return RuntimeMode.NONE
    if markers.servlet_context_base in chain:
        return RuntimeMode.SERVLET
    if markers.reactive_context_base in chain:
        return RuntimeMode.REACTIVE
    return RuntimeMode.NONE


__all__ = [
    "RuntimeMode",
    "RuntimeMarkers",
    "ServletApplicationContext",
    "ReactiveApplicationContext",
    "deduce_from_environment",
    "deduce_from_type",
]
