"""Access control engine."""

from .base import Actor, Decision, ResourceRef
from .evaluator import PolicyEvaluator
from .guards import AuthorizationGate
from .matcher import Verdict, attributes_match, combine_verdicts, policy_verdict
from .registry import ResourceKind, get_resource_kind, register_resource_kind, resolve_resource

__all__ = [
    "Actor",
    "Decision",
    "ResourceRef",
    "PolicyEvaluator",
    "AuthorizationGate",
    "Verdict",
    "attributes_match",
    "combine_verdicts",
    "policy_verdict",
    "ResourceKind",
    "get_resource_kind",
    "register_resource_kind",
    "resolve_resource",
]
