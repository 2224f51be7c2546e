"""
Claim State Machine

Governs which status changes a claim may make and applies them to the claim.
The machine holds no claims itself; callers pass the claim they hold.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, List, Optional

from relief_claims.exceptions import ClaimValidationError, InvalidTransitionError
from relief_claims.models.evidence import StatusChange
from relief_claims.models.status import ClaimStatus
from relief_claims.observability.logger import get_logger, log_claim_event

if TYPE_CHECKING:
    from relief_claims.models.claim import Claim

logger = get_logger(__name__)


def coerce_status(value: Any) -> ClaimStatus:
    """Return value as a ClaimStatus, accepting enum members or status names."""
    if isinstance(value, ClaimStatus):
        return value
    if isinstance(value, str):
        try:
            return ClaimStatus(value.strip().upper())
        except ValueError:
            pass
    raise ClaimValidationError("status", f"unknown claim status: {value!r}", value)


class ClaimStateMachine:
    """
    State machine for disaster-relief claim status.

    The forward path runs from SUBMITTED to PAYMENT_COMPLETED. A claim can be
    denied once assessed or once eligibility is verified, a denial can be
    appealed, and an appeal sends the claim back to review.
    """

    INITIAL_STATUS: ClaimStatus = ClaimStatus.SUBMITTED

    FORWARD_PATH: List[ClaimStatus] = [
        ClaimStatus.SUBMITTED,
        ClaimStatus.UNDER_REVIEW,
        ClaimStatus.ASSESSMENT_SCHEDULED,
        ClaimStatus.ASSESSMENT_COMPLETED,
        ClaimStatus.ELIGIBILITY_VERIFIED,
        ClaimStatus.PAYMENT_PROCESSING,
        ClaimStatus.PAYMENT_COMPLETED,
    ]

    # from_status -> statuses it may move to
    TRANSITIONS: Dict[ClaimStatus, FrozenSet[ClaimStatus]] = {
        ClaimStatus.SUBMITTED: frozenset({ClaimStatus.UNDER_REVIEW}),
        ClaimStatus.UNDER_REVIEW: frozenset({ClaimStatus.ASSESSMENT_SCHEDULED}),
        ClaimStatus.ASSESSMENT_SCHEDULED: frozenset({ClaimStatus.ASSESSMENT_COMPLETED}),
        ClaimStatus.ASSESSMENT_COMPLETED: frozenset(
            {ClaimStatus.ELIGIBILITY_VERIFIED, ClaimStatus.DENIED}
        ),
        ClaimStatus.ELIGIBILITY_VERIFIED: frozenset(
            {ClaimStatus.PAYMENT_PROCESSING, ClaimStatus.DENIED}
        ),
        ClaimStatus.PAYMENT_PROCESSING: frozenset({ClaimStatus.PAYMENT_COMPLETED}),
        ClaimStatus.PAYMENT_COMPLETED: frozenset(),
        ClaimStatus.DENIED: frozenset({ClaimStatus.APPEALED}),
        ClaimStatus.APPEALED: frozenset({ClaimStatus.UNDER_REVIEW}),
    }

    # DENIED concludes the workflow unless the claimant appeals
    TERMINAL_STATUSES: FrozenSet[ClaimStatus] = frozenset(
        {ClaimStatus.PAYMENT_COMPLETED, ClaimStatus.DENIED}
    )

    # Successor used by advance(); denial and appeal are explicit decisions
    _SUCCESSORS: Dict[ClaimStatus, ClaimStatus] = {
        **dict(zip(FORWARD_PATH, FORWARD_PATH[1:])),
        ClaimStatus.APPEALED: ClaimStatus.UNDER_REVIEW,
    }

    def allowed_transitions(self, status: ClaimStatus | str) -> List[ClaimStatus]:
        """Statuses reachable in one step from status, in declaration order."""
        current = coerce_status(status)
        targets = self.TRANSITIONS.get(current, frozenset())
        return [s for s in ClaimStatus if s in targets]

    def is_terminal(self, status: ClaimStatus | str) -> bool:
        return coerce_status(status) in self.TERMINAL_STATUSES

    def can_transition(self, claim: "Claim", target_status: ClaimStatus | str) -> bool:
        """Check if claim may move to target_status."""
        target = coerce_status(target_status)
        return target in self.TRANSITIONS.get(claim.status, frozenset())

    def transition(
        self,
        claim: "Claim",
        target_status: ClaimStatus | str,
        details: Optional[str] = None,
    ) -> StatusChange:
        """
        Move claim to target_status.

        Status and last_updated change together; the change is also appended
        to the claim's status history.

        Args:
            claim: The claim to transition
            target_status: The requested status
            details: Optional note recorded with the change

        Returns:
            The StatusChange that was applied

        Raises:
            InvalidTransitionError: target_status is not reachable; the claim is unchanged
            ClaimValidationError: target_status is not a known status
        """
        target = coerce_status(target_status)
        current = claim.status
        if not self.can_transition(claim, target):
            log_claim_event(
                logger,
                "transition_rejected",
                claim_id=claim.id,
                level=logging.WARNING,
                from_status=current.value,
                to_status=target.value,
            )
            raise InvalidTransitionError(current, target, claim_id=claim.id)

        change = StatusChange(
            claim_id=claim.id,
            from_status=current,
            to_status=target,
            changed_at=claim._next_timestamp(),
            details=details,
        )
        claim._apply_status_change(change)
        log_claim_event(
            logger,
            "status_changed",
            claim_id=claim.id,
            from_status=current.value,
            to_status=target.value,
        )
        return change

    def next_status(self, claim: "Claim") -> Optional[ClaimStatus]:
        """The status advance() would move claim to, or None when there is none."""
        return self._SUCCESSORS.get(claim.status)

    def advance(self, claim: "Claim", details: Optional[str] = None) -> StatusChange:
        """
        Move claim one step along its workflow.

        Raises:
            InvalidTransitionError: claim has no default next status
        """
        next_status = self.next_status(claim)
        if next_status is None:
            raise InvalidTransitionError(claim.status, None, claim_id=claim.id)
        return self.transition(claim, next_status, details=details)


_default_machine = ClaimStateMachine()


def get_state_machine() -> ClaimStateMachine:
    """Return the shared, stateless ClaimStateMachine."""
    return _default_machine
