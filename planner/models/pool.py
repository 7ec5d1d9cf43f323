"""PoolState dataclass for Fusion concentrated-liquidity pools."""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey


@dataclass(frozen=True)
class PoolState:
    """Read-only snapshot of a Fusion pool taken once per planning call.

    The pool state includes:
    - Current price (as a Q64.64 sqrt price)
    - Current tick and tick spacing
    - Both token mints and the pool's vaults
    - Fee-growth and limit-order accumulators

    Invariant: ``tick_current_index`` lies inside the tick array whose start
    index is ``get_tick_array_start_tick_index(tick_current_index, tick_spacing)``.
    """

    address: Pubkey
    program_address: Pubkey
    tick_spacing: int
    tick_current_index: int
    sqrt_price: int  # Q64.64
    token_mint_a: Pubkey
    token_mint_b: Pubkey
    token_vault_a: Pubkey
    token_vault_b: Pubkey
    liquidity: int = 0
    fee_rate: int = 0  # hundredths of a basis point
    order_protocol_fee_rate: int = 0  # basis points of the limit-order fee
    clp_reward_rate: int = 0  # basis points of the limit-order fee paid to LPs
    fee_growth_global_a: int = 0
    fee_growth_global_b: int = 0
    orders_total_amount_a: int = 0
    orders_total_amount_b: int = 0
    orders_filled_amount_a: int = 0
    orders_filled_amount_b: int = 0

    def has_mint(self, mint: Pubkey) -> bool:
        """Check whether ``mint`` is one of the pool's two tokens."""
        return mint == self.token_mint_a or mint == self.token_mint_b

    def is_token_a(self, mint: Pubkey) -> bool:
        """Check if mint is token A.

        Raises:
            ValueError: If the mint is not in the pool
        """
        if mint == self.token_mint_a:
            return True
        if mint == self.token_mint_b:
            return False
        raise ValueError(f"Mint {mint} not in pool {self.address}")

    @property
    def mints(self) -> tuple[Pubkey, Pubkey]:
        """(mint A, mint B)."""
        return (self.token_mint_a, self.token_mint_b)


__all__ = ["PoolState"]
