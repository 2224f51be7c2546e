"""Claim workflow services."""

from relief_claims.services.claim_service import ClaimService

__all__ = ["ClaimService"]
