"""Tests for the in-memory claim store."""

import pytest

from relief_claims.exceptions import ClaimNotFoundError, EvidenceOwnershipError
from relief_claims.models.claim import Claim
from relief_claims.models.evidence import Evidence
from relief_claims.models.status import ClaimStatus
from relief_claims.store import ClaimStore, InMemoryClaimStore


def _claim(disaster_id="HURRICANE-2024", name="Maria Lopez", clock=None, claim_id=None):
    return Claim.create(
        disaster_id,
        {"claimant_name": name, "claimant_email": "c@example.com", "claimant_phone": "555-0100"},
        {"property_address": "12 Palm Street"},
        {"latitude": 26.6, "longitude": -81.8},
        clock=clock,
        claim_id=claim_id,
    )


def test_in_memory_store_satisfies_protocol(store):
    assert isinstance(store, ClaimStore)


def test_save_and_get_round_trip(store, claim):
    claim.attach_evidence(description="Photo")
    store.save(claim)
    loaded = store.get(claim.id)
    assert loaded.id == claim.id
    assert loaded.status == claim.status
    assert loaded.evidences == claim.evidences


def test_get_returns_copy(store, claim):
    """Mutating a loaded claim does not change the store until it is saved."""
    store.save(claim)
    loaded = store.get(claim.id)
    loaded.update_status(ClaimStatus.UNDER_REVIEW)
    assert store.get(claim.id).status == ClaimStatus.SUBMITTED
    store.save(loaded)
    assert store.get(claim.id).status == ClaimStatus.UNDER_REVIEW


def test_saved_copy_is_detached(store, claim):
    store.save(claim)
    claim.update_status(ClaimStatus.UNDER_REVIEW)
    assert store.get(claim.id).status == ClaimStatus.SUBMITTED


def test_get_unknown_claim(store):
    with pytest.raises(ClaimNotFoundError):
        store.get("HURRICANE-2024-00000000")


def test_insert_rejects_existing_id(store, claim):
    store.insert(claim)
    with pytest.raises(ValueError):
        store.insert(claim)
    assert store.count() == 1


def test_delete_removes_claim_and_evidence(store, claim):
    first = claim.attach_evidence(description="Photo 1")
    second = claim.attach_evidence(reference="s3://evidence/2.jpg")
    store.save(claim)
    assert store.find_evidence(first.id) == first
    assert store.evidence_count() == 2

    store.delete(claim.id)

    assert not store.exists(claim.id)
    assert store.find_evidence(first.id) is None
    assert store.find_evidence(second.id) is None
    assert store.evidence_count() == 0


def test_delete_unknown_claim(store):
    with pytest.raises(ClaimNotFoundError):
        store.delete("HURRICANE-2024-00000000")


def test_removed_evidence_is_deleted_on_save(store, claim):
    evidence = claim.attach_evidence(description="Photo")
    store.save(claim)
    claim.remove_evidence(evidence)
    store.save(claim)
    assert store.find_evidence(evidence.id) is None
    assert store.get(claim.id).evidences == ()


def test_evidence_cannot_be_shared_between_stored_claims(store, clock):
    """The same evidence id may not be saved under two claims."""
    first = _claim(clock=clock)
    evidence = first.attach_evidence(description="Photo")
    store.save(first)

    second = _claim(disaster_id="FLOOD-2024", name="Sam Ortiz", clock=clock)
    second.add_evidence(Evidence.from_record({**evidence.model_dump(mode="json"), "claim_id": None}))
    with pytest.raises(EvidenceOwnershipError):
        store.save(second)
    assert not store.exists(second.id)


def test_evidence_moves_after_removal_is_saved(store, clock):
    first = _claim(clock=clock)
    evidence = first.attach_evidence(description="Misfiled photo")
    store.save(first)

    detached = first.remove_evidence(evidence)
    store.save(first)
    second = _claim(disaster_id="FLOOD-2024", clock=clock)
    second.add_evidence(detached)
    store.save(second)
    assert store.find_evidence(evidence.id).claim_id == second.id


def test_new_claim_id_avoids_existing(store, monkeypatch):
    existing = _claim(claim_id="HURRICANE-2024-aaaaaaaa")
    store.save(existing)
    candidates = iter(["HURRICANE-2024-aaaaaaaa", "HURRICANE-2024-bbbbbbbb"])
    monkeypatch.setattr(
        "relief_claims.utils.identifiers.generate_claim_id", lambda disaster_id: next(candidates)
    )
    assert store.new_claim_id("HURRICANE-2024") == "HURRICANE-2024-bbbbbbbb"


def test_search(store, clock):
    a = _claim(clock=clock)
    b = _claim(clock=clock)
    c = _claim(disaster_id="FLOOD-2024", clock=clock)
    b.update_status(ClaimStatus.UNDER_REVIEW)
    for claim in (c, b, a):
        store.save(claim)

    assert [x.id for x in store.search(disaster_id="HURRICANE-2024")] == [a.id, b.id]
    assert [x.id for x in store.search(status=ClaimStatus.UNDER_REVIEW)] == [b.id]
    assert [x.id for x in store.search(disaster_id="HURRICANE-2024", status="SUBMITTED")] == [a.id]
    assert len(store.search()) == 3


def test_new_store_is_empty():
    store = InMemoryClaimStore()
    assert store.count() == 0
    assert store.evidence_count() == 0
