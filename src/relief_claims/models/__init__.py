"""Pydantic models for claims, evidence, and intake payloads."""

from relief_claims.models.claim import Claim
from relief_claims.models.evidence import Evidence, StatusChange
from relief_claims.models.inputs import ClaimantInfo, ClaimInput, Coordinates, PropertyInfo
from relief_claims.models.status import ClaimStatus

__all__ = [
    "Claim",
    "ClaimInput",
    "ClaimStatus",
    "ClaimantInfo",
    "Coordinates",
    "Evidence",
    "PropertyInfo",
    "StatusChange",
]
