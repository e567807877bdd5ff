"""
Verification lifecycle
Explicit transition table and the operator affordance for each state
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import LifecycleError
from ..models import VerificationStatus

S = VerificationStatus

TRANSITIONS = {
    S.NOT_REQUESTED: frozenset({S.SUBMITTING}),
    S.SUBMITTING: frozenset({S.PENDING, S.VERIFIED, S.FAILED, S.RETRYABLE}),
    S.PENDING: frozenset({S.VERIFIED, S.FAILED, S.RETRYABLE}),
    S.FAILED: frozenset({S.SUBMITTING}),
    S.RETRYABLE: frozenset({S.SUBMITTING}),
    S.VERIFIED: frozenset(),
    S.UNKNOWN: frozenset(),
}


class AffordanceKind(str, Enum):
    BUTTON = "button"
    PROGRESS = "progress"
    LINK = "link"
    NONE = "none"


@dataclass(frozen=True)
class Affordance:
    """What the operator sees in the verification column"""
    kind: AffordanceKind
    label: str

    @property
    def actionable(self) -> bool:
        return self.kind is AffordanceKind.BUTTON


AFFORDANCES = {
    S.NOT_REQUESTED: Affordance(AffordanceKind.BUTTON, "Verify"),
    S.RETRYABLE: Affordance(AffordanceKind.BUTTON, "Retry"),
    S.FAILED: Affordance(AffordanceKind.BUTTON, "Failed - Retry"),
    S.SUBMITTING: Affordance(AffordanceKind.PROGRESS, "Submitting…"),
    S.PENDING: Affordance(AffordanceKind.PROGRESS, "Pending…"),
    S.VERIFIED: Affordance(AffordanceKind.LINK, "Verified"),
    S.UNKNOWN: Affordance(AffordanceKind.NONE, "Unknown"),
}

# Adding a status without a transition row or an affordance fails at import
_missing = set(VerificationStatus) - set(TRANSITIONS) | set(VerificationStatus) - set(AFFORDANCES)
if _missing:
    raise LifecycleError(f"Verification states without lifecycle entries: {sorted(s.value for s in _missing)}")


def parse_status(value: Optional[str]) -> VerificationStatus:
    """Backend status string to a lifecycle state. Missing means never requested."""
    if value is None or not str(value).strip():
        return S.NOT_REQUESTED
    try:
        return VerificationStatus(str(value).strip().lower())
    except ValueError:
        return S.UNKNOWN


def can_transition(current: VerificationStatus, target: VerificationStatus) -> bool:
    return target in TRANSITIONS[current]


def transition(current: VerificationStatus, target: VerificationStatus) -> VerificationStatus:
    if not can_transition(current, target):
        raise LifecycleError(f"Cannot move verification from {current.value} to {target.value}")
    return target


def affordance(status: VerificationStatus) -> Affordance:
    return AFFORDANCES[status]


def can_trigger(status: VerificationStatus) -> bool:
    """Verify/Retry is offered only where a trigger is a legal transition"""
    return affordance(status).actionable and can_transition(status, S.SUBMITTING)
