"""Input sanitization for claim payloads received from intake forms."""

import re
from typing import Any

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# Free-text fields keep their internal newlines and tabs
FREE_TEXT_FIELDS = ("damage_description", "description")


def _sanitize_text(text: str, keep_newlines: bool) -> str:
    """Strip control characters and surrounding whitespace."""
    cleaned = _CONTROL_CHARS.sub("", text)
    if not keep_newlines:
        cleaned = re.sub(r"\s+", " ", cleaned)
    return cleaned.strip()


def sanitize_claim_data(claim_data: dict[str, Any] | None) -> dict[str, Any]:
    """
    Sanitize a claim payload before validation.

    - Strips control characters from string fields
    - Collapses whitespace in single-line fields (names, addresses, ids)
    - Trims surrounding whitespace, so blank-only strings become ""
    - Preserves non-string fields as-is (validated by the models)

    Length limits are not applied here; oversized fields fail validation.

    Returns a new dict; does not mutate the input.
    """
    if not claim_data or not isinstance(claim_data, dict):
        return {}

    out: dict[str, Any] = {}
    for key, value in claim_data.items():
        if isinstance(value, str):
            out[key] = _sanitize_text(value, keep_newlines=key in FREE_TEXT_FIELDS)
        elif isinstance(value, dict):
            out[key] = sanitize_claim_data(value)
        else:
            out[key] = value
    return out
