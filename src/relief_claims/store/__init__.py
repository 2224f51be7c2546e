"""Claim store contract and in-memory reference store."""

from relief_claims.store.memory import InMemoryClaimStore
from relief_claims.store.protocol import ClaimStore

__all__ = [
    "ClaimStore",
    "InMemoryClaimStore",
]
