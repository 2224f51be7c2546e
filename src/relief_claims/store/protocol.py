"""Persistence operations the claim core consumes but does not implement."""

from typing import Protocol, runtime_checkable

from relief_claims.models.claim import Claim


@runtime_checkable
class ClaimStore(Protocol):
    """Load, save, and delete claims by id.

    Implementations own the evidence of each stored claim: deleting a claim
    deletes its evidence with it.
    """

    def get(self, claim_id: str) -> Claim:
        """Return the stored claim; raise ClaimNotFoundError if unknown."""
        ...

    def save(self, claim: Claim) -> None:
        """Insert or replace the claim and its evidence."""
        ...

    def delete(self, claim_id: str) -> None:
        """Remove the claim and all of its evidence; raise ClaimNotFoundError if unknown."""
        ...

    def exists(self, claim_id: str) -> bool:
        ...
