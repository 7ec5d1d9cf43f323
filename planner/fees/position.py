"""Fee quotes for liquidity positions and limit orders.

Fee growth is tracked per unit of liquidity as wrapping u128 Q64.64
accumulators: a global one on the pool and, on every initialized tick, the
growth on the side of the tick away from the current price. The growth
inside a position's range is derived from those three values, so the
arithmetic below must wrap exactly like the on-chain program does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from planner.constants import MAX_CLP_REWARD_RATE, MAX_ORDER_PROTOCOL_FEE_RATE
from planner.fees.transfer_fee import apply_transfer_fee
from planner.models.types import U64_MAX, U128_MODULUS

if TYPE_CHECKING:
    from planner.fees.transfer_fee import TransferFee
    from planner.models.pool import PoolState
    from planner.models.position import Position
    from planner.models.tick_array import Tick


@dataclass(frozen=True)
class CollectFeesQuote:
    """Fees a position would receive if collected now, net of transfer fees."""

    fee_owed_a: int
    fee_owed_b: int


def _wrapping_sub(a: int, b: int) -> int:
    return (a - b) % U128_MODULUS


def fee_growth_inside(
    tick_current_index: int,
    tick_lower_index: int,
    tick_upper_index: int,
    fee_growth_global: int,
    fee_growth_outside_lower: int,
    fee_growth_outside_upper: int,
) -> int:
    """Fee growth per unit of liquidity accrued strictly inside a tick range."""
    below = fee_growth_outside_lower
    above = fee_growth_outside_upper
    if tick_current_index < tick_lower_index:
        below = _wrapping_sub(fee_growth_global, below)
    if tick_current_index >= tick_upper_index:
        above = _wrapping_sub(fee_growth_global, above)
    return _wrapping_sub(_wrapping_sub(fee_growth_global, below), above)


def _owed_since_checkpoint(growth_inside: int, checkpoint: int, liquidity: int) -> int:
    owed = (_wrapping_sub(growth_inside, checkpoint) * liquidity) >> 64
    if owed > U64_MAX:
        raise ValueError(f"Fee owed exceeds u64: {owed}")
    return owed


def collect_fees_quote(
    pool: PoolState,
    position: Position,
    tick_lower: Tick,
    tick_upper: Tick,
    transfer_fee_a: TransferFee | None = None,
    transfer_fee_b: TransferFee | None = None,
) -> CollectFeesQuote:
    """Quote the fees a position can collect.

    Args:
        pool: Pool snapshot (current tick and global fee growth)
        position: The position being harvested
        tick_lower: Tick at ``position.tick_lower_index``
        tick_upper: Tick at ``position.tick_upper_index``
        transfer_fee_a: Effective Token-2022 fee of mint A, if any
        transfer_fee_b: Effective Token-2022 fee of mint B, if any

    Returns:
        Fees received per token after transfer fees

    Raises:
        ValueError: If the uncollected fee of either token exceeds u64
    """
    inside_a = fee_growth_inside(
        pool.tick_current_index,
        position.tick_lower_index,
        position.tick_upper_index,
        pool.fee_growth_global_a,
        tick_lower.fee_growth_outside_a,
        tick_upper.fee_growth_outside_a,
    )
    inside_b = fee_growth_inside(
        pool.tick_current_index,
        position.tick_lower_index,
        position.tick_upper_index,
        pool.fee_growth_global_b,
        tick_lower.fee_growth_outside_b,
        tick_upper.fee_growth_outside_b,
    )

    withdrawable_a = position.fee_owed_a + _owed_since_checkpoint(
        inside_a, position.fee_growth_checkpoint_a, position.liquidity
    )
    withdrawable_b = position.fee_owed_b + _owed_since_checkpoint(
        inside_b, position.fee_growth_checkpoint_b, position.liquidity
    )

    return CollectFeesQuote(
        fee_owed_a=apply_transfer_fee(withdrawable_a, transfer_fee_a),
        fee_owed_b=apply_transfer_fee(withdrawable_b, transfer_fee_b),
    )


def limit_order_fee(pool: PoolState) -> int:
    """Fee rate a limit order pays, as a negative rate in the pool's fee units.

    The pool fee less the protocol's share, then less the share rewarded
    to liquidity providers, both in basis points. Sequential integer
    division matches the program's rounding.
    """
    fee = (
        pool.fee_rate
        * (MAX_ORDER_PROTOCOL_FEE_RATE - pool.order_protocol_fee_rate)
        // MAX_ORDER_PROTOCOL_FEE_RATE
        * (MAX_CLP_REWARD_RATE - pool.clp_reward_rate)
        // MAX_CLP_REWARD_RATE
    )
    return -fee


__all__ = ["CollectFeesQuote", "collect_fees_quote", "fee_growth_inside", "limit_order_fee"]
