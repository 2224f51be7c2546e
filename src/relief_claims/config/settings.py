"""Centralized configuration from environment variables with defaults."""

import logging
import os


def _int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _str(key: str, default: str) -> str:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# ---------------------------------------------------------------------------
# Claim fields
# ---------------------------------------------------------------------------

# Column length of damage_description in the claims table
MAX_DAMAGE_DESCRIPTION = 2000

MAX_EVIDENCE_DESCRIPTION = 2000


# ---------------------------------------------------------------------------
# Claim identifiers
# ---------------------------------------------------------------------------

CLAIM_ID_TOKEN_LENGTH = 8
DEFAULT_ID_MAX_ATTEMPTS = 5


def get_id_max_attempts() -> int:
    """Attempts allowed when generating a claim id not already in the store."""
    return max(1, _int("RELIEF_CLAIMS_ID_MAX_ATTEMPTS", DEFAULT_ID_MAX_ATTEMPTS))


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def get_log_format() -> str:
    """Log output format: 'json' or 'human' (default)."""
    fmt = _str("RELIEF_CLAIMS_LOG_FORMAT", "human").lower()
    return fmt if fmt in ("json", "human") else "human"


def get_log_level() -> int:
    """Log level from RELIEF_CLAIMS_LOG_LEVEL (default INFO)."""
    name = _str("RELIEF_CLAIMS_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
