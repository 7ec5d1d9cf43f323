"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_pool, make_ledger

    pool = make_pool(tick_current_index=-100)
    client, codec = make_ledger(pool, existing_tick_arrays=[0])
"""

from __future__ import annotations

import struct
from collections.abc import Iterable

from solders.pubkey import Pubkey

from planner.accounts.pda import get_associated_token_address, get_tick_array_address
from planner.constants import FUSIONAMM_PROGRAM_ID, TICK_ARRAY_SIZE, TOKEN_PROGRAM_ID
from planner.fees.mint import MINT_SIZE
from planner.fees.transfer_fee import EpochTransferFee, TransferFeeConfig
from planner.models.pool import PoolState
from planner.models.tick_array import EMPTY_TICK, Tick, TickArray
from tests.helpers.constants import (
    MINT_A,
    MINT_B,
    POOL,
    SQRT_PRICE_ONE,
    TICK_SPACING,
    VAULT_A,
    VAULT_B,
)
from tests.helpers.fakes import FakeAccountCodec, FakeLedgerClient


def make_pool(
    tick_current_index: int = 0,
    tick_spacing: int = TICK_SPACING,
    token_mint_a: Pubkey = MINT_A,
    token_mint_b: Pubkey = MINT_B,
    address: Pubkey = POOL,
    fee_rate: int = 0,
) -> PoolState:
    """Create a pool snapshot with sensible defaults (price 1.0, no fee)."""
    return PoolState(
        address=address,
        program_address=FUSIONAMM_PROGRAM_ID,
        tick_spacing=tick_spacing,
        tick_current_index=tick_current_index,
        sqrt_price=SQRT_PRICE_ONE,
        token_mint_a=token_mint_a,
        token_mint_b=token_mint_b,
        token_vault_a=VAULT_A,
        token_vault_b=VAULT_B,
        liquidity=10**12,
        fee_rate=fee_rate,
    )


def make_tick_array(start_tick_index: int) -> TickArray:
    """An initialized tick array with liquidity on its first tick."""
    first = Tick(initialized=True, liquidity_net=1_000, liquidity_gross=1_000)
    return TickArray(
        start_tick_index=start_tick_index,
        ticks=(first,) + (EMPTY_TICK,) * (TICK_ARRAY_SIZE - 1),
    )


def make_transfer_fee_config(
    older: tuple[int, int, int] = (0, 0, 0),
    newer: tuple[int, int, int] = (0, 0, 0),
) -> TransferFeeConfig:
    """Build a TransferFeeConfig from (epoch, fee_bps, max_fee) tuples."""
    return TransferFeeConfig(
        older_transfer_fee=EpochTransferFee(*older),
        newer_transfer_fee=EpochTransferFee(*newer),
    )


def make_mint_data(
    decimals: int = 6,
    supply: int = 10**15,
    transfer_fee_config: TransferFeeConfig | None = None,
) -> bytes:
    """Raw mint account bytes.

    Without a fee config this is a plain 82-byte SPL mint; with one it is a
    Token-2022 mint carrying a TransferFeeConfig extension.
    """
    data = bytearray(MINT_SIZE)
    struct.pack_into("<Q", data, 36, supply)
    data[44] = decimals
    data[45] = 1
    if transfer_fee_config is None:
        return bytes(data)

    older = transfer_fee_config.older_transfer_fee
    newer = transfer_fee_config.newer_transfer_fee
    value = struct.pack(
        "<32s32sQQQHQQH",
        bytes(32),
        bytes(32),
        transfer_fee_config.withheld_amount,
        older.epoch,
        older.max_fee,
        older.fee_bps,
        newer.epoch,
        newer.max_fee,
        newer.fee_bps,
    )
    data += bytes(165 - MINT_SIZE)
    data.append(1)  # account type: mint
    data += struct.pack("<HH", 1, len(value)) + value
    return bytes(data)


def make_ledger(
    pool: PoolState,
    existing_tick_arrays: Iterable[int] = (),
    mint_a_data: bytes | None = None,
    mint_b_data: bytes | None = None,
    mint_a_program: Pubkey = TOKEN_PROGRAM_ID,
    mint_b_program: Pubkey = TOKEN_PROGRAM_ID,
    epoch: int = 0,
) -> tuple[FakeLedgerClient, FakeAccountCodec]:
    """An in-memory ledger holding ``pool``, both of its mints and the listed tick arrays.

    Args:
        pool: Pool to register
        existing_tick_arrays: Start indexes of tick arrays that exist on the ledger
        mint_a_data: Raw mint A bytes (default: plain SPL mint)
        mint_b_data: Raw mint B bytes (default: plain SPL mint)
        mint_a_program: Owner of mint A
        mint_b_program: Owner of mint B
        epoch: Current epoch

    Returns:
        (client, codec)
    """
    client = FakeLedgerClient(epoch=epoch)
    codec = FakeAccountCodec()

    client.add_account(pool.address, pool.program_address, b"pool")
    codec.pools[pool.address] = pool

    client.add_account(pool.token_mint_a, mint_a_program, mint_a_data or make_mint_data())
    client.add_account(pool.token_mint_b, mint_b_program, mint_b_data or make_mint_data())

    for start in existing_tick_arrays:
        address = get_tick_array_address(pool.address, start, pool.program_address)
        client.add_account(address, pool.program_address, b"tick_array")
        codec.tick_arrays[address] = make_tick_array(start)

    return client, codec


def add_token_account(
    client: FakeLedgerClient,
    owner: Pubkey,
    mint: Pubkey,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Register an existing associated token account and return its address."""
    address = get_associated_token_address(owner, mint, token_program)
    client.add_account(address, token_program, b"token_account")
    return address
