"""Achievement verification state machine.

``pending`` is the only state a decision can leave; ``verified`` and
``rejected`` are terminal.
"""

from __future__ import annotations

from ..models.user import VerificationStatus
from .errors import WorkflowError

TRANSITIONS: dict[VerificationStatus, frozenset[VerificationStatus]] = {
    VerificationStatus.PENDING: frozenset({VerificationStatus.VERIFIED, VerificationStatus.REJECTED}),
    VerificationStatus.VERIFIED: frozenset(),
    VerificationStatus.REJECTED: frozenset(),
}

DECISIONS = TRANSITIONS[VerificationStatus.PENDING]


def is_terminal(status: VerificationStatus) -> bool:
    return not TRANSITIONS[VerificationStatus(status)]


def parse_decision(decision) -> VerificationStatus:
    """Coerce ``decision`` to a status and make sure it is a verification outcome."""

    try:
        status = VerificationStatus(decision)
    except ValueError as exc:
        raise WorkflowError(f"Unknown verification decision {decision!r}.", status_code=400) from exc
    if status not in DECISIONS:
        raise WorkflowError("Decision must be 'verified' or 'rejected'.", status_code=400)
    return status


def check_transition(current: VerificationStatus, decision: VerificationStatus) -> None:
    """Raise ``WorkflowError`` when ``current`` cannot move to ``decision``."""

    current = VerificationStatus(current)
    if decision not in TRANSITIONS[current]:
        raise WorkflowError(f"Achievement has already been {current.value}.")
