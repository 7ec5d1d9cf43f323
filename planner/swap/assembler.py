"""Swap instruction assembly.

Turns an intent, its quote and the resolved accounts into the ordered
instruction list: account preparation, the swap itself, cleanup.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from solders.instruction import AccountMeta, Instruction

from planner.constants import MEMO_PROGRAM_ID
from planner.errors import QuoteMismatchError
from planner.models.intent import SwapIntent, SwapMode
from planner.swap.encoding import (
    AccountsType,
    RemainingAccountsInfo,
    RemainingAccountsSlice,
    SwapInstructionArgs,
)
from planner.swap.window import FIXED_SLOTS, SUPPLEMENTAL_SLOTS, WINDOW_SIZE

if TYPE_CHECKING:
    from solders.pubkey import Pubkey

    from planner.models.pool import PoolState
    from planner.models.quote import SwapQuote
    from planner.models.tick_array import TickArrayAccount


class SwapAccountIndex(IntEnum):
    """Position of each account in the swap instruction."""

    TOKEN_PROGRAM_A = 0
    TOKEN_PROGRAM_B = 1
    MEMO_PROGRAM = 2
    TOKEN_AUTHORITY = 3
    FUSION_POOL = 4
    TOKEN_MINT_A = 5
    TOKEN_MINT_B = 6
    TOKEN_OWNER_ACCOUNT_A = 7
    TOKEN_VAULT_A = 8
    TOKEN_OWNER_ACCOUNT_B = 9
    TOKEN_VAULT_B = 10
    TICK_ARRAY_0 = 11
    TICK_ARRAY_1 = 12
    TICK_ARRAY_2 = 13
    # Trailing block, described by RemainingAccountsInfo
    SUPPLEMENTAL_TICK_ARRAY_0 = 14
    SUPPLEMENTAL_TICK_ARRAY_1 = 15


SUPPLEMENTAL_TICK_ARRAYS_INFO = RemainingAccountsInfo(
    slices=(
        RemainingAccountsSlice(AccountsType.SUPPLEMENTAL_TICK_ARRAYS, len(SUPPLEMENTAL_SLOTS)),
    )
)


@dataclass(frozen=True)
class SwapAccounts:
    """Accounts referenced by the swap instruction besides the pool's own."""

    token_authority: Pubkey
    token_program_a: Pubkey
    token_program_b: Pubkey
    token_owner_account_a: Pubkey
    token_owner_account_b: Pubkey


def is_a_to_b(specified_is_token_a: bool, mode: SwapMode) -> bool:
    """Trade direction.

    An exact input of token A and an exact output of token B both mean the
    trade flows A to B.
    """
    return specified_is_token_a == (mode is SwapMode.EXACT_IN)


def other_amount_threshold(quote: SwapQuote) -> int:
    """Slippage-bounded threshold passed to the program.

    Exact-in: minimum acceptable output. Exact-out: maximum acceptable input.
    """
    if quote.mode is SwapMode.EXACT_IN:
        return quote.token_min_out
    if quote.mode is SwapMode.EXACT_OUT:
        return quote.token_max_in
    raise QuoteMismatchError(f"Unknown quote mode: {quote.mode!r}")


def max_input_amount(quote: SwapQuote) -> int:
    """Most the trade could spend, used to size token-account preparation."""
    if quote.mode is SwapMode.EXACT_IN:
        return quote.token_in
    if quote.mode is SwapMode.EXACT_OUT:
        return quote.token_max_in
    raise QuoteMismatchError(f"Unknown quote mode: {quote.mode!r}")


def token_account_requirements(pool: PoolState, a_to_b: bool, max_in: int) -> dict[Pubkey, int]:
    """Amount of each mint the owner must be able to spend.

    The input side needs ``max_in``; the output side only needs an account.
    """
    return {
        pool.token_mint_a: max_in if a_to_b else 0,
        pool.token_mint_b: 0 if a_to_b else max_in,
    }


def build_swap_args(intent: SwapIntent, quote: SwapQuote, a_to_b: bool) -> SwapInstructionArgs:
    """Scalar arguments: the caller's literal amount and the quote's threshold."""
    if quote.mode is not intent.mode:
        raise QuoteMismatchError(
            f"Cannot assemble a {intent.mode.value} swap from a {quote.mode.value} quote"
        )
    return SwapInstructionArgs(
        amount=intent.amount,
        other_amount_threshold=other_amount_threshold(quote),
        amount_specified_is_input=intent.is_exact_input,
        a_to_b=a_to_b,
        remaining_accounts_info=SUPPLEMENTAL_TICK_ARRAYS_INFO,
    )


def build_swap_instruction(
    pool: PoolState,
    tick_arrays: Sequence[TickArrayAccount],
    accounts: SwapAccounts,
    args: SwapInstructionArgs,
) -> Instruction:
    """Build the swap instruction.

    Window slots 0-2 fill the fixed tick-array accounts; slots 3-4 are
    appended as writable supplemental accounts announced by
    ``args.remaining_accounts_info``.

    Raises:
        ValueError: If the window does not hold exactly five arrays
    """
    if len(tick_arrays) != WINDOW_SIZE:
        raise ValueError(f"Expected {WINDOW_SIZE} tick arrays, got {len(tick_arrays)}")

    metas = [
        AccountMeta(accounts.token_program_a, is_signer=False, is_writable=False),
        AccountMeta(accounts.token_program_b, is_signer=False, is_writable=False),
        AccountMeta(MEMO_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(accounts.token_authority, is_signer=True, is_writable=False),
        AccountMeta(pool.address, is_signer=False, is_writable=True),
        AccountMeta(pool.token_mint_a, is_signer=False, is_writable=False),
        AccountMeta(pool.token_mint_b, is_signer=False, is_writable=False),
        AccountMeta(accounts.token_owner_account_a, is_signer=False, is_writable=True),
        AccountMeta(pool.token_vault_a, is_signer=False, is_writable=True),
        AccountMeta(accounts.token_owner_account_b, is_signer=False, is_writable=True),
        AccountMeta(pool.token_vault_b, is_signer=False, is_writable=True),
    ]
    metas += [
        AccountMeta(tick_arrays[slot].address, is_signer=False, is_writable=True)
        for slot in FIXED_SLOTS
    ]
    metas += [
        AccountMeta(tick_arrays[slot].address, is_signer=False, is_writable=True)
        for slot in SUPPLEMENTAL_SLOTS
    ]

    return Instruction(pool.program_address, args.encode(), metas)


def assemble_swap_instructions(
    create_instructions: Sequence[Instruction],
    swap_instruction: Instruction,
    cleanup_instructions: Sequence[Instruction],
) -> tuple[Instruction, ...]:
    """Preparation first, then the swap, then cleanup."""
    return (*create_instructions, swap_instruction, *cleanup_instructions)


__all__ = [
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
]
