"""Declarative candidate manifests (YAML).

A manifest lists candidates with their ordering hints and conditions::

    candidates:
      - id: app.web.DispatcherConfiguration
        priority: -100
        after: [app.web.ServerFactoryConfiguration]
        conditions:
          - kind: on_runtime_mode
            mode: servlet
          - kind: on_property
            prefix: app.web
            name: enabled
            matchIfMissing: true

Manifests are validated against the bundled JSON Schema before parsing so
malformed input fails fast with the offending candidate and field.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from jsonschema import Draft202012Validator

from autoconfig.core.conditions.registry import ConditionKindRegistry
from autoconfig.core.exceptions import ConfigurationError, ManifestError
from autoconfig.core.utils.io import read_yaml
from autoconfig.data import read_yaml as read_data_yaml

from .model import Candidate

SCHEMA_FILE = "candidates.schema.yaml"


def _validator() -> Draft202012Validator:
    schema = read_data_yaml("schemas", SCHEMA_FILE)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def validate_manifest(data: Any, *, source: str = "<memory>") -> None:
    """Raise :class:`ManifestError` for the first schema violation in ``data``."""
    errors = sorted(_validator().iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if not errors:
        return
    err = errors[0]
    path = list(err.path)
    candidate: Optional[str] = None
    field_path = path
    if len(path) >= 2 and path[0] == "candidates" and isinstance(path[1], int):
        entry = (data.get("candidates") or [])[path[1]]
        if isinstance(entry, Mapping) and entry.get("id"):
            candidate = str(entry["id"])
        field_path = path[2:]
    if isinstance(err.instance, Mapping):
        if err.validator == "required":
            field_path = field_path + [p for p in err.validator_value if p not in err.instance][:1]
        elif err.validator == "additionalProperties":
            known = set(err.schema.get("properties") or {})
            field_path = field_path + sorted(str(k) for k in err.instance if k not in known)[:1]
    field = "/".join(str(p) for p in field_path) or "<root>"
    raise ManifestError(
        f"Invalid candidate manifest {source}: {err.message}",
        candidate=candidate,
        field=field,
        context={"source": source},
    )


def parse_manifest(
    data: Any,
    *,
    source: str = "<memory>",
    kinds: Optional[ConditionKindRegistry] = None,
) -> List[Candidate]:
    """Validate and turn a manifest mapping into candidates (in declared order)."""
    validate_manifest(data, source=source)
    kinds = kinds or ConditionKindRegistry()
    out: List[Candidate] = []
    for entry in data.get("candidates") or []:
        identity = str(entry["id"]).strip()
        try:
            conditions = [kinds.build(spec, candidate=identity) for spec in entry.get("conditions") or []]
            out.append(
                Candidate(
                    identity=identity,
                    priority=int(entry.get("priority", 0)),
                    after=entry.get("after") or (),
                    before=entry.get("before") or (),
                    conditions=tuple(conditions),
                    source=source,
                )
            )
        except ConfigurationError as exc:
            exc.for_candidate(identity)
            exc.context.setdefault("source", source)
            raise
    return out


def load_manifest(path: Path, *, kinds: Optional[ConditionKindRegistry] = None) -> List[Candidate]:
    """Read a YAML manifest from ``path``.

    Raises:
        ManifestError: If the file is missing, unparsable or invalid
    """
    p = Path(path)
    try:
        data: Dict[str, Any] = read_yaml(p, default={}, raise_on_error=True)
    except Exception as exc:
        raise ManifestError(
            f"Cannot read candidate manifest {p}: {exc}",
            field="<file>",
            context={"source": str(p)},
        ) from exc
    return parse_manifest(data, source=str(p), kinds=kinds)


__all__ = ["load_manifest", "parse_manifest", "validate_manifest"]
