"""Planner error classes.

Every failure a planning call can surface has its own type so callers can
tell "nothing to plan" apart from "transient, retry".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from solders.pubkey import Pubkey


class PlanningError(Exception):
    """Base error for swap planning."""

    pass


class InvalidIntentError(PlanningError):
    """Swap intent is malformed (non-positive amount, bad slippage, foreign mint)."""

    pass


class MissingAuthorityError(PlanningError):
    """No authority was passed and the configured funder is unset."""

    pass


class PoolNotFoundError(PlanningError):
    """Pool address does not resolve to an account."""

    def __init__(self, pool_address: Pubkey) -> None:
        super().__init__(f"Pool {pool_address} not found")
        self.pool_address = pool_address


class MintResolutionError(PlanningError):
    """One of the pool's token mints could not be fetched."""

    def __init__(self, mint: Pubkey, reason: str = "not found") -> None:
        super().__init__(f"Mint {mint} {reason}")
        self.mint = mint


class LedgerFetchError(PlanningError):
    """RPC or transport failure while reading ledger state.

    Planning is idempotent, so the whole call can be retried by the caller.
    """

    pass


class QuoteMismatchError(PlanningError):
    """Quoter returned a quote whose mode does not match the intent."""

    pass


__all__ = [
    "PlanningError",
    "InvalidIntentError",
    "MissingAuthorityError",
    "PoolNotFoundError",
    "MintResolutionError",
    "LedgerFetchError",
    "QuoteMismatchError",
]
