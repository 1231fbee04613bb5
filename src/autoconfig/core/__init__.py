"""autoconfig core library package.

Re-exports the activation engine's main entry points; the submodules hold
the full surface.
"""
from __future__ import annotations

from . import exceptions  # noqa: F401
from .bootstrap import collect_candidates, create_context, run_activation
from .candidates import Candidate, CandidateRegistry, OrderingResolver
from .environment.context import EvaluationContext
from .evaluation import ActivationPass, ActivationResult, ConditionEvaluator
from .exclusion import CompositeExcludeFilter, ExclusionFilter, configuration_module
from .outcome import ConditionMessage, ConditionOutcome
from .packages import PackageScopeRegistry
from .report import ConditionEvaluationReport
from .runtime import RuntimeMarkers, RuntimeMode, deduce_from_environment, deduce_from_type

__all__ = [
    "exceptions",
    "ActivationPass",
    "ActivationResult",
    "Candidate",
    "CandidateRegistry",
    "CompositeExcludeFilter",
    "ConditionEvaluationReport",
    "ConditionEvaluator",
    "ConditionMessage",
    "ConditionOutcome",
    "EvaluationContext",
    "ExclusionFilter",
    "OrderingResolver",
    "PackageScopeRegistry",
    "RuntimeMarkers",
    "RuntimeMode",
    "collect_candidates",
    "configuration_module",
    "create_context",
    "deduce_from_environment",
    "deduce_from_type",
    "run_activation",
]
