"""Pure policy matching functions."""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from ingest.models.policy import Action, Matcher, Policy

from .base import ResourceRef, enum_value


class Verdict(str, Enum):
    """Contribution of a single policy to a decision."""

    ALLOW = "allow"
    DENY = "deny"
    ABSTAIN = "abstain"


def attributes_match(required: Mapping[str, Any] | None, actual: Mapping[str, Any]) -> bool:
    """Check every required key is present in actual with an equal value.

    An empty requirement always matches.
    """
    for key, value in (required or {}).items():
        if key not in actual or enum_value(actual[key]) != value:
            return False
    return True


def policy_verdict(policy: Policy, resource: ResourceRef, action: Action) -> Verdict:
    """Evaluate one policy against a resource and action."""
    action_ok = action in policy.action_set
    attributes_ok = attributes_match(policy.attributes, resource.attributes)
    matcher = Matcher(policy.matcher)

    if matcher == Matcher.MATCH_NONE:
        return Verdict.DENY if attributes_ok else Verdict.ABSTAIN

    if matcher == Matcher.MATCH_ALL:
        return Verdict.ALLOW if action_ok and attributes_ok else Verdict.ABSTAIN

    return Verdict.ALLOW if action_ok or attributes_ok else Verdict.ABSTAIN


def combine_verdicts(verdicts: Iterable[Verdict]) -> Verdict:
    """Combine policy verdicts. Any deny wins over every allow."""
    allowed = False
    for verdict in verdicts:
        if verdict == Verdict.DENY:
            return Verdict.DENY
        if verdict == Verdict.ALLOW:
            allowed = True
    return Verdict.ALLOW if allowed else Verdict.ABSTAIN
