"""Tick and tick array models."""

from __future__ import annotations

from dataclasses import dataclass

from solders.pubkey import Pubkey

from planner.constants import TICK_ARRAY_SIZE


@dataclass(frozen=True)
class Tick:
    """A single tick slot: liquidity deltas, fee checkpoints and order-book volumes."""

    initialized: bool = False
    liquidity_net: int = 0
    liquidity_gross: int = 0
    fee_growth_outside_a: int = 0
    fee_growth_outside_b: int = 0
    age: int = 0
    open_orders_input: int = 0
    part_filled_orders_input: int = 0
    part_filled_orders_remaining_input: int = 0
    fulfilled_a_to_b_orders_input: int = 0
    fulfilled_b_to_a_orders_input: int = 0

    @property
    def is_empty(self) -> bool:
        """True if the slot carries no liquidity and no order volume."""
        return self == EMPTY_TICK


EMPTY_TICK = Tick()


@dataclass(frozen=True)
class TickArray:
    """Fixed-size block of ``TICK_ARRAY_SIZE`` ticks starting at ``start_tick_index``."""

    start_tick_index: int
    ticks: tuple[Tick, ...]

    def __post_init__(self) -> None:
        if len(self.ticks) != TICK_ARRAY_SIZE:
            raise ValueError(
                f"Tick array must hold {TICK_ARRAY_SIZE} ticks, got {len(self.ticks)}"
            )

    @classmethod
    def uninitialized(cls, start_tick_index: int) -> TickArray:
        """Synthetic array with every slot zeroed, used when none exists on-ledger."""
        return cls(start_tick_index=start_tick_index, ticks=(EMPTY_TICK,) * TICK_ARRAY_SIZE)


@dataclass(frozen=True)
class TickArrayAccount:
    """A tick array together with where it lives.

    ``initialized`` is False for synthetic defaults; those are planning-only
    and are never written back.
    """

    address: Pubkey
    data: TickArray
    program_address: Pubkey
    initialized: bool = True

    @property
    def start_tick_index(self) -> int:
        return self.data.start_tick_index


__all__ = ["Tick", "EMPTY_TICK", "TickArray", "TickArrayAccount"]
