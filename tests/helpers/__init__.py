"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Fixed test keys and scenario amounts
- fakes: In-memory ledger client and account codec
- factories: Pool, tick array, mint and ledger factory functions
"""

from tests.helpers.constants import (
    AUTHORITY,
    EXACT_IN_AMOUNT,
    EXACT_OUT_AMOUNT,
    FUNDER,
    MINT_A,
    MINT_B,
    OTHER_MINT,
    POOL,
    TICK_SPACING,
    VAULT_A,
    VAULT_B,
    key,
)
from tests.helpers.factories import (
    add_token_account,
    make_ledger,
    make_mint_data,
    make_pool,
    make_tick_array,
    make_transfer_fee_config,
)
from tests.helpers.fakes import FakeAccountCodec, FakeLedgerClient

__all__ = [
    # Constants
    "POOL",
    "MINT_A",
    "MINT_B",
    "OTHER_MINT",
    "VAULT_A",
    "VAULT_B",
    "AUTHORITY",
    "FUNDER",
    "TICK_SPACING",
    "EXACT_IN_AMOUNT",
    "EXACT_OUT_AMOUNT",
    "key",
    # Fakes
    "FakeLedgerClient",
    "FakeAccountCodec",
    # Factories
    "make_pool",
    "make_tick_array",
    "make_transfer_fee_config",
    "make_mint_data",
    "make_ledger",
    "add_token_account",
]
