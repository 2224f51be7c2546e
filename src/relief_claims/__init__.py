"""Disaster-relief claim lifecycle and evidence model."""

from relief_claims.exceptions import (
    ClaimError,
    ClaimIdCollisionError,
    ClaimNotFoundError,
    ClaimValidationError,
    EvidenceNotFoundError,
    EvidenceOwnershipError,
    InvalidTransitionError,
)
from relief_claims.lifecycle import ClaimStateMachine
from relief_claims.models import Claim, ClaimInput, ClaimStatus, Evidence, StatusChange
from relief_claims.utils.identifiers import generate_claim_id

__all__ = [
    "Claim",
    "ClaimError",
    "ClaimIdCollisionError",
    "ClaimInput",
    "ClaimNotFoundError",
    "ClaimStateMachine",
    "ClaimStatus",
    "ClaimValidationError",
    "Evidence",
    "EvidenceNotFoundError",
    "EvidenceOwnershipError",
    "InvalidTransitionError",
    "StatusChange",
    "generate_claim_id",
]
