"""Claim status definitions."""

from enum import Enum


class ClaimStatus(str, Enum):
    """
    Workflow states of a disaster-relief claim.

    Forward path: SUBMITTED -> UNDER_REVIEW -> ASSESSMENT_SCHEDULED ->
    ASSESSMENT_COMPLETED -> ELIGIBILITY_VERIFIED -> PAYMENT_PROCESSING -> PAYMENT_COMPLETED
    Denial and appeal: ASSESSMENT_COMPLETED | ELIGIBILITY_VERIFIED -> DENIED -> APPEALED -> UNDER_REVIEW
    """

    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    ASSESSMENT_SCHEDULED = "ASSESSMENT_SCHEDULED"
    ASSESSMENT_COMPLETED = "ASSESSMENT_COMPLETED"
    ELIGIBILITY_VERIFIED = "ELIGIBILITY_VERIFIED"
    PAYMENT_PROCESSING = "PAYMENT_PROCESSING"
    PAYMENT_COMPLETED = "PAYMENT_COMPLETED"
    DENIED = "DENIED"
    APPEALED = "APPEALED"
