"""Claim identifier generation scoped to a disaster event."""

import uuid
from typing import Callable

from relief_claims.config.settings import CLAIM_ID_TOKEN_LENGTH, get_id_max_attempts
from relief_claims.exceptions import ClaimIdCollisionError, ClaimValidationError


def generate_claim_id(disaster_id: str) -> str:
    """Return '<disaster_id>-<token>' where token is the first 8 hex chars of a UUID4.

    The token space is 32 bits, so ids are traceable but not guaranteed unique;
    use generate_unique_claim_id when an existence check is available.
    """
    if not isinstance(disaster_id, str) or not disaster_id.strip():
        raise ClaimValidationError("disaster_id", "must not be blank", disaster_id)
    return f"{disaster_id}-{uuid.uuid4().hex[:CLAIM_ID_TOKEN_LENGTH]}"


def generate_unique_claim_id(
    disaster_id: str,
    exists: Callable[[str], bool],
    max_attempts: int | None = None,
) -> str:
    """Generate a claim id for which exists(candidate) is False.

    Raises:
        ClaimIdCollisionError: every candidate within max_attempts was taken.
    """
    attempts = max_attempts if max_attempts is not None else get_id_max_attempts()
    for _ in range(max(1, attempts)):
        candidate = generate_claim_id(disaster_id)
        if not exists(candidate):
            return candidate
    raise ClaimIdCollisionError(
        f"Could not generate an unused claim id for disaster {disaster_id!r} "
        f"after {attempts} attempts"
    )


def generate_evidence_id() -> str:
    """Generate an evidence id."""
    return f"EVD-{uuid.uuid4().hex[:12].upper()}"
