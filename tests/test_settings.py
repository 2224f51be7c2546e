"""Tests for centralized configuration (settings)."""

import logging

from relief_claims.config import settings


def test_field_limits():
    """Field limits match the claims table column lengths."""
    assert settings.MAX_DAMAGE_DESCRIPTION == 2000
    assert settings.CLAIM_ID_TOKEN_LENGTH == 8


def test_get_id_max_attempts_default(monkeypatch):
    monkeypatch.delenv("RELIEF_CLAIMS_ID_MAX_ATTEMPTS", raising=False)
    assert settings.get_id_max_attempts() == settings.DEFAULT_ID_MAX_ATTEMPTS


def test_get_id_max_attempts_respects_env(monkeypatch):
    monkeypatch.setenv("RELIEF_CLAIMS_ID_MAX_ATTEMPTS", "12")
    assert settings.get_id_max_attempts() == 12


def test_get_id_max_attempts_invalid_falls_back(monkeypatch):
    monkeypatch.setenv("RELIEF_CLAIMS_ID_MAX_ATTEMPTS", "many")
    assert settings.get_id_max_attempts() == settings.DEFAULT_ID_MAX_ATTEMPTS
    monkeypatch.setenv("RELIEF_CLAIMS_ID_MAX_ATTEMPTS", "0")
    assert settings.get_id_max_attempts() == 1


def test_get_log_format(monkeypatch):
    monkeypatch.delenv("RELIEF_CLAIMS_LOG_FORMAT", raising=False)
    assert settings.get_log_format() == "human"
    monkeypatch.setenv("RELIEF_CLAIMS_LOG_FORMAT", "JSON")
    assert settings.get_log_format() == "json"
    monkeypatch.setenv("RELIEF_CLAIMS_LOG_FORMAT", "xml")
    assert settings.get_log_format() == "human"


def test_get_log_level(monkeypatch):
    monkeypatch.delenv("RELIEF_CLAIMS_LOG_LEVEL", raising=False)
    assert settings.get_log_level() == logging.INFO
    monkeypatch.setenv("RELIEF_CLAIMS_LOG_LEVEL", "debug")
    assert settings.get_log_level() == logging.DEBUG
    monkeypatch.setenv("RELIEF_CLAIMS_LOG_LEVEL", "chatty")
    assert settings.get_log_level() == logging.INFO
