"""In-memory claim store: CRUD, evidence ownership checks, and search."""

import threading
from typing import Optional

from relief_claims.exceptions import ClaimNotFoundError, EvidenceOwnershipError
from relief_claims.lifecycle.state_machine import coerce_status
from relief_claims.models.claim import Claim
from relief_claims.models.evidence import Evidence
from relief_claims.models.status import ClaimStatus
from relief_claims.observability.logger import get_logger, log_claim_event
from relief_claims.utils.identifiers import generate_unique_claim_id

logger = get_logger(__name__)


class InMemoryClaimStore:
    """Dict-backed ClaimStore.

    Claims are stored and returned as deep copies, so a caller mutating a
    loaded claim changes nothing until it saves. The lock keeps the maps
    consistent; it does not serialize workflow steps on the same claim.
    """

    def __init__(self) -> None:
        self._claims: dict[str, Claim] = {}
        # evidence id -> owning claim id
        self._evidence_owner: dict[str, str] = {}
        self._lock = threading.Lock()

    def new_claim_id(self, disaster_id: str, max_attempts: Optional[int] = None) -> str:
        """Generate a claim id not used by any stored claim."""
        return generate_unique_claim_id(disaster_id, self.exists, max_attempts=max_attempts)

    def exists(self, claim_id: str) -> bool:
        with self._lock:
            return claim_id in self._claims

    def get(self, claim_id: str) -> Claim:
        with self._lock:
            claim = self._claims.get(claim_id)
            if claim is None:
                raise ClaimNotFoundError(f"Claim not found: {claim_id}")
            return claim.model_copy(deep=True)

    def save(self, claim: Claim) -> None:
        """Insert or replace claim.

        Raises:
            EvidenceOwnershipError: the claim carries evidence owned by another stored claim
        """
        with self._lock:
            for evidence in claim.evidences:
                owner = self._evidence_owner.get(evidence.id)
                if owner is not None and owner != claim.id:
                    raise EvidenceOwnershipError(
                        f"Evidence {evidence.id} is owned by claim {owner}, not {claim.id}"
                    )
            self._drop_evidence_of(claim.id)
            self._claims[claim.id] = claim.model_copy(deep=True)
            for evidence in claim.evidences:
                self._evidence_owner[evidence.id] = claim.id
        log_claim_event(
            logger, "claim_saved", claim_id=claim.id, status=claim.status.value,
            evidence_count=len(claim.evidences),
        )

    def insert(self, claim: Claim) -> None:
        """Save a claim that must not already exist.

        Raises:
            ValueError: a claim with the same id is already stored
        """
        if self.exists(claim.id):
            raise ValueError(f"Claim already exists: {claim.id}")
        self.save(claim)

    def delete(self, claim_id: str) -> None:
        """Delete claim_id together with all of its evidence."""
        with self._lock:
            if claim_id not in self._claims:
                raise ClaimNotFoundError(f"Claim not found: {claim_id}")
            self._drop_evidence_of(claim_id)
            del self._claims[claim_id]
        log_claim_event(logger, "claim_deleted", claim_id=claim_id)

    def find_evidence(self, evidence_id: str) -> Optional[Evidence]:
        """Return stored evidence by id, or None if no stored claim owns it."""
        with self._lock:
            owner = self._evidence_owner.get(evidence_id)
            if owner is None:
                return None
            for evidence in self._claims[owner].evidences:
                if evidence.id == evidence_id:
                    return evidence.model_copy()
        return None

    def search(
        self,
        disaster_id: Optional[str] = None,
        status: ClaimStatus | str | None = None,
    ) -> list[Claim]:
        """Claims matching disaster_id and/or status, oldest submission first."""
        wanted_status = coerce_status(status) if status is not None else None
        with self._lock:
            matches = [
                claim.model_copy(deep=True)
                for claim in self._claims.values()
                if (disaster_id is None or claim.disaster_id == disaster_id)
                and (wanted_status is None or claim.status == wanted_status)
            ]
        return sorted(matches, key=lambda c: c.submission_date)

    def count(self) -> int:
        with self._lock:
            return len(self._claims)

    def evidence_count(self) -> int:
        with self._lock:
            return len(self._evidence_owner)

    def _drop_evidence_of(self, claim_id: str) -> None:
        stale = [eid for eid, owner in self._evidence_owner.items() if owner == claim_id]
        for eid in stale:
            del self._evidence_owner[eid]
