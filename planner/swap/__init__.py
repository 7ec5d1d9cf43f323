"""Swap planning package.

This package provides the swap planning pipeline:
- Tick-array window resolution with synthetic defaults
- Quote dispatch over the SwapQuoter protocol
- Swap instruction encoding and assembly
- SwapPlanner orchestrating the whole call
"""

from .assembler import (
    SUPPLEMENTAL_TICK_ARRAYS_INFO,
    SwapAccountIndex,
    SwapAccounts,
    assemble_swap_instructions,
    build_swap_args,
    build_swap_instruction,
    is_a_to_b,
    max_input_amount,
    other_amount_threshold,
    token_account_requirements,
)
from .encoding import (
    SWAP_DISCRIMINATOR,
    AccountsType,
    RemainingAccountsInfo,
    RemainingAccountsSlice,
    SwapInstructionArgs,
    decode_swap_instruction_args,
)
from .planner import SwapPlanner, validate_intent
from .quoter import (
    MockSwapQuoter,
    SwapQuoter,
    get_swap_quote,
    max_amount_with_slippage,
    min_amount_with_slippage,
    validate_slippage,
)
from .window import (
    TickArrayWindowSlot,
    fetch_tick_arrays_or_default,
    get_tick_array_start_tick_index,
    get_tick_array_window,
)

__all__ = [
    # Window
    "TickArrayWindowSlot",
    "get_tick_array_start_tick_index",
    "get_tick_array_window",
    "fetch_tick_arrays_or_default",
    # Quote
    "SwapQuoter",
    "MockSwapQuoter",
    "get_swap_quote",
    "validate_slippage",
    "min_amount_with_slippage",
    "max_amount_with_slippage",
    # Encoding
    "SWAP_DISCRIMINATOR",
    "AccountsType",
    "RemainingAccountsSlice",
    "RemainingAccountsInfo",
    "SwapInstructionArgs",
    "decode_swap_instruction_args",
    # Assembly
    "SwapAccountIndex",
    "SwapAccounts",
    "SUPPLEMENTAL_TICK_ARRAYS_INFO",
    "is_a_to_b",
    "other_amount_threshold",
    "max_input_amount",
    "token_account_requirements",
    "build_swap_args",
    "build_swap_instruction",
    "assemble_swap_instructions",
    # Planner
    "SwapPlanner",
    "validate_intent",
]
