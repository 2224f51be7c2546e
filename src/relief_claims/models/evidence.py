"""Evidence attached to a claim and the claim's status audit records."""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    computed_field,
    field_validator,
    model_validator,
)

from relief_claims.config.settings import MAX_EVIDENCE_DESCRIPTION
from relief_claims.exceptions import ClaimValidationError
from relief_claims.models.inputs import validate_model
from relief_claims.models.status import ClaimStatus
from relief_claims.utils.clock import utc_now
from relief_claims.utils.identifiers import generate_evidence_id


def assume_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes so all claim timestamps compare."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class Evidence(BaseModel):
    """Supporting artifact (photo, document, record) for a claim.

    Content fields are immutable. claim_id is a read-only back-reference to
    the owning claim, None while the item is not attached; only
    Claim.add_evidence and Claim.remove_evidence change it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=generate_evidence_id, description="Evidence ID")
    evidence_type: str = Field(default="document", min_length=1, description="Kind of artifact")
    description: Optional[str] = Field(
        default=None, max_length=MAX_EVIDENCE_DESCRIPTION, description="What the artifact shows"
    )
    reference: Optional[str] = Field(
        default=None, description="URI, file path, or record locator of the artifact"
    )
    created_at: datetime = Field(default_factory=utc_now)

    _claim_id: Optional[str] = PrivateAttr(default=None)

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return assume_utc(value)

    @model_validator(mode="after")
    def _description_or_reference(self) -> "Evidence":
        has_description = bool(self.description and self.description.strip())
        has_reference = bool(self.reference and self.reference.strip())
        if not (has_description or has_reference):
            raise ValueError("evidence needs a description or a reference")
        return self

    @computed_field
    @property
    def claim_id(self) -> Optional[str]:
        return self._claim_id

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Evidence":
        """Rebuild evidence, including its back-reference, from a dumped record."""
        if not isinstance(record, Mapping):
            raise ClaimValidationError("evidences", "expected a mapping", record)
        claim_id = record.get("claim_id")
        if claim_id is not None and not isinstance(claim_id, str):
            raise ClaimValidationError("claim_id", "expected a string", claim_id)
        evidence = validate_model(
            cls,
            {k: v for k, v in record.items() if k != "claim_id"},
            default_field="description",
        )
        evidence._claim_id = claim_id
        return evidence


class StatusChange(BaseModel):
    """Audit record of one status transition."""

    model_config = ConfigDict(frozen=True)

    claim_id: str
    from_status: ClaimStatus
    to_status: ClaimStatus
    changed_at: datetime
    details: Optional[str] = None

    @field_validator("changed_at")
    @classmethod
    def _changed_at_utc(cls, value: datetime) -> datetime:
        return assume_utc(value)
