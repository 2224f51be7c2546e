"""Exceptions raised by the claim aggregate, lifecycle and store layers."""

from typing import Any


class ClaimError(Exception):
    """Base class for all claim domain errors."""


class ClaimValidationError(ClaimError, ValueError):
    """A required field is missing, blank, or out of domain."""

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")


class InvalidTransitionError(ClaimError, ValueError):
    """Requested status is not reachable from the claim's current status."""

    def __init__(self, current: Any, requested: Any, claim_id: str | None = None):
        self.current = current
        self.requested = requested
        self.claim_id = claim_id
        current_name = getattr(current, "value", current)
        requested_name = getattr(requested, "value", requested)
        prefix = f"Claim {claim_id}: " if claim_id else ""
        super().__init__(
            f"{prefix}invalid transition from {current_name} to {requested_name}"
        )


class EvidenceOwnershipError(ClaimError, ValueError):
    """Evidence is already owned by a claim and cannot be attached again."""


class EvidenceNotFoundError(ClaimError, LookupError):
    """Evidence id is not part of the claim's collection."""


class ClaimIdCollisionError(ClaimError, RuntimeError):
    """No unused claim id could be generated within the attempt budget."""


class ClaimNotFoundError(ClaimError, LookupError):
    """Claim id is unknown to the store."""
