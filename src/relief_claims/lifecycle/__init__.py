"""Claim lifecycle: allowed status transitions and their application."""

from relief_claims.lifecycle.state_machine import (
    ClaimStateMachine,
    coerce_status,
    get_state_machine,
)

__all__ = [
    "ClaimStateMachine",
    "coerce_status",
    "get_state_machine",
]
