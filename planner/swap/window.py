"""Tick-array window resolution.

A swap may move the price across up to two array-widths in either direction,
so the planner always resolves five tick arrays around the current tick.
Arrays only exist on-ledger where liquidity or orders were placed; missing
ones are replaced by zeroed synthetic arrays so the quoter always gets a
dense five-array window.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

import structlog

from planner.accounts.pda import get_tick_array_address
from planner.constants import TICK_ARRAY_SIZE
from planner.models.tick_array import TickArray, TickArrayAccount

if TYPE_CHECKING:
    from planner.accounts.client import LedgerClient
    from planner.accounts.codec import AccountCodec
    from planner.models.pool import PoolState

logger = structlog.get_logger()


class TickArrayWindowSlot(IntEnum):
    """Position of each array in the window.

    Slots 0-2 go to the swap instruction's fixed tick-array accounts, slots
    3-4 to its supplemental accounts. Reordering silently changes which
    liquidity the program consults.
    """

    CURRENT = 0
    NEXT = 1
    NEXT_2 = 2
    PREVIOUS = 3
    PREVIOUS_2 = 4


# Offset of each slot from the current array, in array-widths
WINDOW_OFFSETS: dict[TickArrayWindowSlot, int] = {
    TickArrayWindowSlot.CURRENT: 0,
    TickArrayWindowSlot.NEXT: 1,
    TickArrayWindowSlot.NEXT_2: 2,
    TickArrayWindowSlot.PREVIOUS: -1,
    TickArrayWindowSlot.PREVIOUS_2: -2,
}

WINDOW_SIZE = len(TickArrayWindowSlot)
FIXED_SLOTS = (TickArrayWindowSlot.CURRENT, TickArrayWindowSlot.NEXT, TickArrayWindowSlot.NEXT_2)
SUPPLEMENTAL_SLOTS = (TickArrayWindowSlot.PREVIOUS, TickArrayWindowSlot.PREVIOUS_2)


def ticks_per_array(tick_spacing: int) -> int:
    """Tick range covered by one array."""
    if tick_spacing <= 0:
        raise ValueError(f"tick_spacing must be positive, got {tick_spacing}")
    return tick_spacing * TICK_ARRAY_SIZE


def get_tick_array_start_tick_index(tick_index: int, tick_spacing: int) -> int:
    """Start index of the array containing ``tick_index``.

    Aligns down (towards negative infinity), so negative ticks map to the
    array below zero rather than to 0.
    """
    width = ticks_per_array(tick_spacing)
    return (tick_index // width) * width


def get_tick_array_window(tick_current_index: int, tick_spacing: int) -> list[int]:
    """Start indices of the five arrays around the current tick, in slot order.

    Example:
        >>> get_tick_array_window(0, 64)
        [0, 5632, 11264, -5632, -11264]
    """
    base = get_tick_array_start_tick_index(tick_current_index, tick_spacing)
    offset = ticks_per_array(tick_spacing)
    return [base + WINDOW_OFFSETS[slot] * offset for slot in TickArrayWindowSlot]


async def fetch_tick_arrays_or_default(
    client: LedgerClient,
    codec: AccountCodec,
    pool: PoolState,
) -> list[TickArrayAccount]:
    """Resolve the five-array window for a pool.

    Derives the five addresses, fetches them in a single batch and
    synthesizes an uninitialized array (owned by the pool's program) for
    every address that has no account.

    Args:
        client: Ledger client
        codec: Decoder for tick array accounts
        pool: Pool snapshot

    Returns:
        Five TickArrayAccount in TickArrayWindowSlot order
    """
    start_indexes = get_tick_array_window(pool.tick_current_index, pool.tick_spacing)
    addresses = [
        get_tick_array_address(pool.address, start, pool.program_address)
        for start in start_indexes
    ]

    maybe_accounts = await client.get_multiple_accounts(addresses)

    tick_arrays: list[TickArrayAccount] = []
    for slot, address, start, account in zip(
        TickArrayWindowSlot, addresses, start_indexes, maybe_accounts, strict=True
    ):
        if account is not None:
            tick_arrays.append(
                TickArrayAccount(
                    address=address,
                    data=codec.decode_tick_array(account),
                    program_address=account.owner,
                )
            )
            continue

        logger.debug(
            "tick_array_synthesized",
            pool=str(pool.address),
            slot=slot.name,
            start_tick_index=start,
        )
        tick_arrays.append(
            TickArrayAccount(
                address=address,
                data=TickArray.uninitialized(start),
                program_address=pool.program_address,
                initialized=False,
            )
        )

    return tick_arrays


__all__ = [
    "TickArrayWindowSlot",
    "WINDOW_OFFSETS",
    "WINDOW_SIZE",
    "FIXED_SLOTS",
    "SUPPLEMENTAL_SLOTS",
    "ticks_per_array",
    "get_tick_array_start_tick_index",
    "get_tick_array_window",
    "fetch_tick_arrays_or_default",
]
