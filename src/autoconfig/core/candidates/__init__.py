"""Candidate collection and ordering.

Responsibilities:
- Hold discovered configuration-module candidates in discovery order.
- Load candidates from declarative YAML manifests (schema-validated).
- List provided candidate identities per marker key (factories files).
- Resolve a deterministic activation order from priorities and after/before edges.
"""
from __future__ import annotations

from .manifest import load_manifest, parse_manifest, validate_manifest
from .model import DEFAULT_PRIORITY, HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, Candidate
from .ordering import OrderingResolver, resolve
from .providers import (
    CONFIGURATION_MODULE_KEY,
    CandidateProvider,
    StaticCandidateProvider,
    YamlCandidateProvider,
)
from .registry import CandidateRegistry

__all__ = [
    # model
    "Candidate",
    "DEFAULT_PRIORITY",
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    # registry
    "CandidateRegistry",
    # manifests
    "load_manifest",
    "parse_manifest",
    "validate_manifest",
    # ordering
    "OrderingResolver",
    "resolve",
    # providers
    "CONFIGURATION_MODULE_KEY",
    "CandidateProvider",
    "StaticCandidateProvider",
    "YamlCandidateProvider",
]
