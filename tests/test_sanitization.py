"""Tests for claim input sanitization."""

from relief_claims.utils.sanitization import sanitize_claim_data


def test_sanitize_claim_data_preserves_valid_input(claim_data):
    """Valid claim data is preserved."""
    out = sanitize_claim_data(claim_data)
    assert out == claim_data
    assert out is not claim_data


def test_sanitize_claim_data_strips_control_characters():
    out = sanitize_claim_data({"claimant_name": "Maria\x07 Lopez\x00", "claimant_phone": "\x1b555-0100"})
    assert out["claimant_name"] == "Maria Lopez"
    assert out["claimant_phone"] == "555-0100"


def test_sanitize_claim_data_collapses_whitespace_in_single_line_fields():
    out = sanitize_claim_data({"property_address": "  12 Palm\n  Street \t"})
    assert out["property_address"] == "12 Palm Street"


def test_sanitize_claim_data_keeps_newlines_in_free_text():
    out = sanitize_claim_data({"damage_description": "Roof gone.\nKitchen flooded.  "})
    assert out["damage_description"] == "Roof gone.\nKitchen flooded."


def test_sanitize_claim_data_blank_becomes_empty():
    out = sanitize_claim_data({"claimant_email": "   \t "})
    assert out["claimant_email"] == ""


def test_sanitize_claim_data_does_not_truncate():
    """Length bounds are left to validation."""
    out = sanitize_claim_data({"damage_description": "y" * 5000})
    assert len(out["damage_description"]) == 5000


def test_sanitize_claim_data_passes_non_strings_through():
    out = sanitize_claim_data({"latitude": 26.6, "longitude": -81.8, "postal_code": None})
    assert out == {"latitude": 26.6, "longitude": -81.8, "postal_code": None}


def test_sanitize_claim_data_nested_mapping():
    out = sanitize_claim_data({"claimant": {"claimant_name": " Sam\x00 "}})
    assert out == {"claimant": {"claimant_name": "Sam"}}


def test_sanitize_claim_data_empty_input():
    """Empty or None input returns empty dict."""
    assert sanitize_claim_data({}) == {}
    assert sanitize_claim_data(None) == {}


def test_sanitize_claim_data_does_not_mutate_input():
    data = {"claimant_name": "  Maria  "}
    sanitize_claim_data(data)
    assert data == {"claimant_name": "  Maria  "}
