"""Pydantic models for claim intake payloads."""

from typing import Annotated, Any, Optional, TypeVar

from pydantic import BaseModel, Field, StringConstraints, ValidationError, field_validator

from relief_claims.config.settings import MAX_DAMAGE_DESCRIPTION
from relief_claims.exceptions import ClaimValidationError

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

M = TypeVar("M", bound=BaseModel)


def validate_model(model_cls: type[M], data: Any, default_field: str | None = None) -> M:
    """Validate data into model_cls, raising ClaimValidationError for the first bad field.

    Errors raised by model-level validators carry no location; they are
    reported against default_field (or the model name).
    """
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else (default_field or model_cls.__name__)
        raise ClaimValidationError(field, first.get("msg", "invalid value"), first.get("input")) from e


class ClaimantInfo(BaseModel):
    """Who is asking for assistance."""

    claimant_name: NonBlankStr = Field(..., description="Full name of the claimant")
    claimant_email: NonBlankStr = Field(..., description="Contact email")
    claimant_phone: NonBlankStr = Field(..., description="Contact phone number")


class PropertyInfo(BaseModel):
    """The damaged property."""

    property_address: NonBlankStr = Field(..., description="Street address of the property")
    postal_code: Optional[str] = Field(default=None, description="Postal code, if known")


class Coordinates(BaseModel):
    """Location of the damaged property."""

    latitude: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)


class ClaimInput(BaseModel):
    """Flat intake payload for a new claim."""

    disaster_id: NonBlankStr = Field(..., description="Disaster event the claim belongs to")
    claimant_name: NonBlankStr = Field(..., description="Full name of the claimant")
    claimant_email: NonBlankStr = Field(..., description="Contact email")
    claimant_phone: NonBlankStr = Field(..., description="Contact phone number")
    property_address: NonBlankStr = Field(..., description="Street address of the property")
    postal_code: Optional[str] = Field(default=None, description="Postal code, if known")
    latitude: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)
    damage_description: Optional[str] = Field(
        default=None,
        max_length=MAX_DAMAGE_DESCRIPTION,
        description="Free-text description of the damage",
    )

    @field_validator("postal_code", "damage_description")
    @classmethod
    def _blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value if value.strip() else None
