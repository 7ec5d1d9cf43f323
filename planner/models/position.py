"""Liquidity position snapshot."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """The fee-relevant fields of a liquidity position.

    Checkpoints are the pool's fee growth inside the position's range
    (u128, Q64.64) as of the last time fees were settled into ``fee_owed_*``.
    """

    liquidity: int
    tick_lower_index: int
    tick_upper_index: int
    fee_growth_checkpoint_a: int = 0
    fee_growth_checkpoint_b: int = 0
    fee_owed_a: int = 0
    fee_owed_b: int = 0

    def in_range(self, tick_current_index: int) -> bool:
        """True if the current tick earns fees for this position."""
        return self.tick_lower_index <= tick_current_index < self.tick_upper_index


__all__ = ["Position"]
