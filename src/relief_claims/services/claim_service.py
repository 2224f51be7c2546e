"""Claim service: load, mutate through the aggregate, and save."""

from typing import Any, Mapping, Optional

from relief_claims.models.claim import Claim
from relief_claims.models.evidence import Evidence, StatusChange
from relief_claims.models.inputs import ClaimInput, validate_model
from relief_claims.models.status import ClaimStatus
from relief_claims.observability.logger import claim_context
from relief_claims.store.memory import InMemoryClaimStore
from relief_claims.utils.clock import Clock
from relief_claims.utils.sanitization import sanitize_claim_data


class ClaimService:
    """Workflow operations over a claim store.

    Each operation loads the claim, applies one aggregate operation, and
    saves it. A failed operation leaves the stored claim untouched. Callers
    are responsible for at most one concurrent mutator per claim id.
    """

    def __init__(self, store: InMemoryClaimStore | None = None, clock: Optional[Clock] = None):
        self._store = store if store is not None else InMemoryClaimStore()
        self._clock = clock

    @property
    def store(self) -> InMemoryClaimStore:
        return self._store

    def submit_claim(self, claim_data: ClaimInput | Mapping[str, Any]) -> Claim:
        """Validate intake data, assign an unused claim id, and store a SUBMITTED claim."""
        if isinstance(claim_data, ClaimInput):
            claim_input = claim_data
        else:
            raw = dict(claim_data) if isinstance(claim_data, Mapping) else claim_data
            claim_input = validate_model(ClaimInput, sanitize_claim_data(raw))
        claim_id = self._store.new_claim_id(claim_input.disaster_id)
        claim = Claim.from_input(claim_input, claim_id=claim_id, clock=self._clock)
        self._store.insert(claim)
        return claim

    def get_claim(self, claim_id: str) -> Claim:
        """Raises ClaimNotFoundError if claim_id is unknown."""
        return self._load(claim_id)

    def change_status(
        self,
        claim_id: str,
        target_status: ClaimStatus | str,
        details: Optional[str] = None,
    ) -> StatusChange:
        """Transition a stored claim; raises InvalidTransitionError without saving on failure."""
        claim = self._load(claim_id)
        with claim_context(claim_id=claim.id, disaster_id=claim.disaster_id):
            change = claim.update_status(target_status, details=details)
            self._store.save(claim)
        return change

    def add_evidence(
        self,
        claim_id: str,
        description: Optional[str] = None,
        reference: Optional[str] = None,
        evidence_type: str = "document",
    ) -> Evidence:
        claim = self._load(claim_id)
        with claim_context(claim_id=claim.id, disaster_id=claim.disaster_id):
            evidence = claim.attach_evidence(
                description=description, reference=reference, evidence_type=evidence_type
            )
            self._store.save(claim)
        return evidence

    def remove_evidence(self, claim_id: str, evidence_id: str) -> Evidence:
        """Remove evidence from a stored claim; the evidence is deleted with the save."""
        claim = self._load(claim_id)
        with claim_context(claim_id=claim.id, disaster_id=claim.disaster_id):
            removed = claim.remove_evidence(evidence_id)
            self._store.save(claim)
        return removed

    def delete_claim(self, claim_id: str) -> None:
        """Delete a claim and all of its evidence."""
        self._store.delete(claim_id)

    def get_claim_history(self, claim_id: str) -> list[StatusChange]:
        """Status changes of a claim in the order they were applied."""
        return list(self._load(claim_id).status_history)

    def search_claims(
        self,
        disaster_id: Optional[str] = None,
        status: ClaimStatus | str | None = None,
    ) -> list[Claim]:
        """Search by disaster and/or status. Both optional; if both None, returns []."""
        if disaster_id is None and status is None:
            return []
        return self._store.search(disaster_id=disaster_id, status=status)

    def _load(self, claim_id: str) -> Claim:
        claim = self._store.get(claim_id)
        if self._clock is not None:
            claim.use_clock(self._clock)
        return claim
