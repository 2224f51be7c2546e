"""Shared pytest fixtures for all test files."""

from datetime import datetime, timedelta, timezone

import pytest

from relief_claims.models.claim import Claim
from relief_claims.services.claim_service import ClaimService
from relief_claims.store.memory import InMemoryClaimStore

DISASTER_ID = "HURRICANE-2024"


def make_clock(start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
    """Clock returning start, start + step, start + 2*step, ... on each call."""
    current = [start or datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)]

    def tick() -> datetime:
        now = current[0]
        current[0] = now + step
        return now

    return tick


@pytest.fixture
def claim_data():
    """Flat intake payload for a valid claim."""
    return {
        "disaster_id": DISASTER_ID,
        "claimant_name": "Maria Lopez",
        "claimant_email": "maria.lopez@example.com",
        "claimant_phone": "+1-555-0100",
        "property_address": "12 Palm Street, Fort Myers, FL",
        "postal_code": "33901",
        "latitude": 26.6406,
        "longitude": -81.8723,
        "damage_description": "Roof torn off, water damage in living room.",
    }


@pytest.fixture
def clock_factory():
    """Factory for deterministic clocks: clock_factory(start=None, step=timedelta(seconds=1))."""
    return make_clock


@pytest.fixture
def clock():
    return make_clock()


@pytest.fixture
def claim(clock):
    """A freshly SUBMITTED claim with a deterministic clock."""
    return Claim.create(
        DISASTER_ID,
        {
            "claimant_name": "Maria Lopez",
            "claimant_email": "maria.lopez@example.com",
            "claimant_phone": "+1-555-0100",
        },
        {"property_address": "12 Palm Street, Fort Myers, FL", "postal_code": "33901"},
        {"latitude": 26.6406, "longitude": -81.8723},
        "Roof torn off, water damage in living room.",
        clock=clock,
    )


@pytest.fixture
def store():
    return InMemoryClaimStore()


@pytest.fixture
def service(store, clock):
    return ClaimService(store=store, clock=clock)
