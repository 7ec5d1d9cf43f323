"""Ledger collaborators: account fetching, decoding and address derivation."""

from planner.accounts.client import (
    MAX_ACCOUNTS_PER_REQUEST,
    LedgerClient,
    RawAccount,
    SolanaLedgerClient,
)
from planner.accounts.codec import AccountCodec
from planner.accounts.pda import get_associated_token_address, get_tick_array_address

__all__ = [
    "RawAccount",
    "LedgerClient",
    "SolanaLedgerClient",
    "MAX_ACCOUNTS_PER_REQUEST",
    "AccountCodec",
    "get_tick_array_address",
    "get_associated_token_address",
]
