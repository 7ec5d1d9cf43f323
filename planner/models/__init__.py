"""Domain models for the swap planner."""

from planner.models.intent import SwapIntent, SwapMode
from planner.models.plan import SwapPlan
from planner.models.pool import PoolState
from planner.models.position import Position
from planner.models.quote import ExactInSwapQuote, ExactOutSwapQuote, SwapQuote
from planner.models.tick_array import EMPTY_TICK, Tick, TickArray, TickArrayAccount
from planner.models.types import U64, U64_MAX, U128_MODULUS, Address, to_pubkey

__all__ = [
    # Types
    "Address",
    "U64",
    "U64_MAX",
    "U128_MODULUS",
    "to_pubkey",
    # Pool and ticks
    "PoolState",
    "Tick",
    "EMPTY_TICK",
    "TickArray",
    "TickArrayAccount",
    "Position",
    # Intent and quote
    "SwapMode",
    "SwapIntent",
    "ExactInSwapQuote",
    "ExactOutSwapQuote",
    "SwapQuote",
    # Output
    "SwapPlan",
]
