"""Observability module: structured logging with claim context.

This module provides:
- Structured logging with claim and disaster ID context
- JSON and human-readable formatters
"""

from relief_claims.observability.logger import (
    ClaimLogger,
    claim_context,
    configure_logging,
    get_logger,
    log_claim_event,
)

__all__ = [
    "ClaimLogger",
    "get_logger",
    "claim_context",
    "configure_logging",
    "log_claim_event",
]
