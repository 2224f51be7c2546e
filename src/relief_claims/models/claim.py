"""Claim aggregate root: intake fields, workflow status, and owned evidence."""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    computed_field,
    field_validator,
    model_validator,
)

from relief_claims.config.settings import MAX_DAMAGE_DESCRIPTION
from relief_claims.exceptions import (
    ClaimValidationError,
    EvidenceNotFoundError,
    EvidenceOwnershipError,
)
from relief_claims.models.evidence import Evidence, StatusChange, assume_utc
from relief_claims.models.inputs import (
    ClaimantInfo,
    ClaimInput,
    Coordinates,
    NonBlankStr,
    PropertyInfo,
    validate_model,
)
from relief_claims.models.status import ClaimStatus
from relief_claims.observability.logger import get_logger, log_claim_event
from relief_claims.utils.clock import Clock, utc_now
from relief_claims.utils.identifiers import generate_claim_id

logger = get_logger(__name__)

# Keys of a claim record that hold workflow state rather than intake fields
STATE_FIELDS = ("status", "last_updated", "evidences", "status_history")


class _ClaimState(BaseModel):
    """Workflow state carried by a claim record."""

    status: ClaimStatus = ClaimStatus.SUBMITTED
    last_updated: Optional[datetime] = None
    evidences: List[Dict[str, Any]] = Field(default_factory=list)
    status_history: List[StatusChange] = Field(default_factory=list)

    @field_validator("last_updated")
    @classmethod
    def _last_updated_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return assume_utc(value) if value is not None else None


def _part_fields(label: str, part: Any) -> dict[str, Any]:
    if part is None:
        return {}
    if isinstance(part, BaseModel):
        return part.model_dump()
    if isinstance(part, Mapping):
        return dict(part)
    raise ClaimValidationError(label, "expected a mapping or model", part)


class Claim(BaseModel):
    """
    Disaster-relief claim.

    Intake fields are frozen once the claim exists. Status, last_updated,
    evidences and status_history are read-only properties; they change only
    through update_status/advance and the evidence operations.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Claim ID, '<disaster_id>-<token>'")
    disaster_id: NonBlankStr = Field(..., description="Disaster event the claim belongs to")
    claimant_name: NonBlankStr
    claimant_email: NonBlankStr
    claimant_phone: NonBlankStr
    property_address: NonBlankStr
    postal_code: Optional[str] = None
    latitude: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)
    damage_description: Optional[str] = Field(default=None, max_length=MAX_DAMAGE_DESCRIPTION)
    submission_date: datetime

    _status: ClaimStatus = PrivateAttr(default=ClaimStatus.SUBMITTED)
    _last_updated: datetime = PrivateAttr(default=None)
    _evidences: List[Evidence] = PrivateAttr(default_factory=list)
    _status_history: List[StatusChange] = PrivateAttr(default_factory=list)
    _clock: Optional[Clock] = PrivateAttr(default=None)

    @field_validator("submission_date")
    @classmethod
    def _submission_date_utc(cls, value: datetime) -> datetime:
        return assume_utc(value)

    @model_validator(mode="after")
    def _id_scoped_to_disaster(self) -> "Claim":
        if not self.id.startswith(f"{self.disaster_id}-"):
            raise ValueError("claim id must start with '<disaster_id>-'")
        return self

    def model_post_init(self, __context: Any) -> None:
        self._last_updated = self.submission_date

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        disaster_id: str,
        claimant: Union[ClaimantInfo, Mapping[str, Any]],
        property_info: Union[PropertyInfo, Mapping[str, Any]],
        coordinates: Union[Coordinates, Mapping[str, Any]],
        damage_description: Optional[str] = None,
        *,
        claim_id: Optional[str] = None,
        clock: Optional[Clock] = None,
    ) -> "Claim":
        """Validate intake data and create a SUBMITTED claim.

        Raises:
            ClaimValidationError: a required field is missing, blank, or out of range
        """
        payload: dict[str, Any] = {}
        payload.update(_part_fields("claimant", claimant))
        payload.update(_part_fields("property_info", property_info))
        payload.update(_part_fields("coordinates", coordinates))
        payload["disaster_id"] = disaster_id
        payload["damage_description"] = damage_description
        claim_input = validate_model(ClaimInput, payload)
        return cls.from_input(claim_input, claim_id=claim_id, clock=clock)

    @classmethod
    def from_input(
        cls,
        claim_input: ClaimInput,
        *,
        claim_id: Optional[str] = None,
        clock: Optional[Clock] = None,
    ) -> "Claim":
        """Create a SUBMITTED claim from an already validated intake payload."""
        clock = clock or utc_now
        data = claim_input.model_dump()
        data["id"] = claim_id or generate_claim_id(claim_input.disaster_id)
        data["submission_date"] = clock()
        claim = validate_model(cls, data, default_field="id")
        claim._clock = clock
        log_claim_event(
            logger, "claim_created", claim_id=claim.id, disaster_id=claim.disaster_id
        )
        return claim

    @classmethod
    def from_record(cls, record: Mapping[str, Any], *, clock: Optional[Clock] = None) -> "Claim":
        """Rebuild a claim from a record produced by to_record().

        The status history must replay through the state machine from
        SUBMITTED to the recorded status, in time order.

        Raises:
            ClaimValidationError: the record is malformed or breaks a claim invariant
        """
        from relief_claims.lifecycle.state_machine import get_state_machine

        if not isinstance(record, Mapping):
            raise ClaimValidationError("record", "expected a mapping", record)
        claim = validate_model(cls, dict(record), default_field="id")
        state = validate_model(_ClaimState, {k: record[k] for k in STATE_FIELDS if k in record})
        history = state.status_history

        last_updated = state.last_updated
        if last_updated is None:
            last_updated = history[-1].changed_at if history else claim.submission_date
        if last_updated < claim.submission_date:
            raise ClaimValidationError(
                "last_updated", "must not be earlier than submission_date", last_updated
            )

        machine = get_state_machine()
        expected = machine.INITIAL_STATUS
        previous_at = claim.submission_date
        for change in history:
            if change.claim_id != claim.id:
                raise ClaimValidationError(
                    "status_history", f"entry references claim {change.claim_id!r}", change.claim_id
                )
            if change.from_status != expected:
                raise ClaimValidationError(
                    "status_history",
                    f"entry starts at {change.from_status.value}, expected {expected.value}",
                    change.from_status.value,
                )
            if change.to_status not in machine.allowed_transitions(change.from_status):
                raise ClaimValidationError(
                    "status_history",
                    f"invalid transition from {change.from_status.value} to {change.to_status.value}",
                    change.to_status.value,
                )
            if not previous_at <= change.changed_at <= last_updated:
                raise ClaimValidationError(
                    "status_history", "entries must be in time order", change.changed_at
                )
            expected = change.to_status
            previous_at = change.changed_at
        if expected != state.status:
            raise ClaimValidationError(
                "status_history",
                f"history ends at {expected.value} but status is {state.status.value}",
                state.status.value,
            )

        evidences = [Evidence.from_record(raw) for raw in state.evidences]
        seen: set[str] = set()
        for evidence in evidences:
            if evidence.claim_id != claim.id:
                raise ClaimValidationError(
                    "evidences",
                    f"evidence {evidence.id} references claim {evidence.claim_id!r}",
                    evidence.claim_id,
                )
            if evidence.id in seen:
                raise ClaimValidationError("evidences", f"duplicate evidence {evidence.id}", evidence.id)
            seen.add(evidence.id)

        claim._status = state.status
        claim._last_updated = last_updated
        claim._evidences = evidences
        claim._status_history = list(history)
        if clock is not None:
            claim.use_clock(clock)
        return claim

    def use_clock(self, clock: Clock) -> None:
        """Use clock for timestamps of later mutations."""
        self._clock = clock

    def to_record(self) -> dict[str, Any]:
        """JSON-compatible record of every field, including workflow state."""
        return self.model_dump(mode="json")

    # ------------------------------------------------------------------
    # Read-only workflow state
    # ------------------------------------------------------------------

    @computed_field
    @property
    def status(self) -> ClaimStatus:
        return self._status

    @computed_field
    @property
    def last_updated(self) -> datetime:
        return self._last_updated

    @computed_field
    @property
    def evidences(self) -> tuple[Evidence, ...]:
        return tuple(self._evidences)

    @computed_field
    @property
    def status_history(self) -> tuple[StatusChange, ...]:
        return tuple(self._status_history)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def update_status(
        self, target_status: Union[ClaimStatus, str], details: Optional[str] = None
    ) -> StatusChange:
        """Move the claim to target_status through the claim state machine.

        Raises:
            InvalidTransitionError: target_status is not reachable from the current status
        """
        from relief_claims.lifecycle.state_machine import get_state_machine

        return get_state_machine().transition(self, target_status, details=details)

    def advance(self, details: Optional[str] = None) -> StatusChange:
        """Move the claim to the next status of its workflow."""
        from relief_claims.lifecycle.state_machine import get_state_machine

        return get_state_machine().advance(self, details=details)

    def allowed_transitions(self) -> List[ClaimStatus]:
        from relief_claims.lifecycle.state_machine import get_state_machine

        return get_state_machine().allowed_transitions(self._status)

    # ------------------------------------------------------------------
    # Evidence
    # ------------------------------------------------------------------

    def add_evidence(self, item: Evidence) -> Evidence:
        """Attach item to this claim and return it with its back-reference set.

        Raises:
            EvidenceOwnershipError: item belongs to another claim or is already attached here
        """
        if item.claim_id is not None and item.claim_id != self.id:
            raise EvidenceOwnershipError(
                f"Evidence {item.id} is owned by claim {item.claim_id}, not {self.id}"
            )
        if any(existing.id == item.id for existing in self._evidences):
            raise EvidenceOwnershipError(f"Evidence {item.id} is already attached to claim {self.id}")

        item._claim_id = self.id
        self._evidences.append(item)
        self._touch()
        log_claim_event(
            logger, "evidence_added", claim_id=self.id, evidence_id=item.id,
            evidence_type=item.evidence_type,
        )
        return item

    def attach_evidence(
        self,
        description: Optional[str] = None,
        reference: Optional[str] = None,
        evidence_type: str = "document",
    ) -> Evidence:
        """Create a new evidence item owned by this claim.

        Raises:
            ClaimValidationError: neither description nor reference is given, or a field is invalid
        """
        evidence = validate_model(
            Evidence,
            {
                "evidence_type": evidence_type,
                "description": description,
                "reference": reference,
                "created_at": self._next_timestamp(),
            },
            default_field="description",
        )
        return self.add_evidence(evidence)

    def remove_evidence(self, item: Union[Evidence, str]) -> Evidence:
        """Remove evidence (by item or id) and return it detached from the claim.

        Raises:
            EvidenceNotFoundError: the evidence is not part of this claim
        """
        evidence_id = item.id if isinstance(item, Evidence) else item
        for index, existing in enumerate(self._evidences):
            if existing.id == evidence_id:
                break
        else:
            raise EvidenceNotFoundError(f"Evidence {evidence_id} not found on claim {self.id}")

        removed = self._evidences.pop(index)
        self._touch()
        log_claim_event(logger, "evidence_removed", claim_id=self.id, evidence_id=removed.id)
        removed._claim_id = None
        return removed

    def get_evidence(self, evidence_id: str) -> Evidence:
        for existing in self._evidences:
            if existing.id == evidence_id:
                return existing
        raise EvidenceNotFoundError(f"Evidence {evidence_id} not found on claim {self.id}")

    # ------------------------------------------------------------------
    # Timestamp bookkeeping (used by the state machine)
    # ------------------------------------------------------------------

    def _next_timestamp(self) -> datetime:
        """Current time, never earlier than last_updated."""
        now = assume_utc((self._clock or utc_now)())
        return now if now > self._last_updated else self._last_updated

    def _touch(self) -> None:
        self._last_updated = self._next_timestamp()

    def _apply_status_change(self, change: StatusChange) -> None:
        self._status = change.to_status
        self._last_updated = change.changed_at
        self._status_history.append(change)
