"""Token account preparation for swaps."""

from planner.token.accounts import (
    AssociatedTokenAccountPreparer,
    TokenAccountInstructions,
    TokenAccountPreparer,
)
from planner.token.instructions import (
    close_account,
    create_associated_token_account_idempotent,
    sync_native,
    transfer_lamports,
)

__all__ = [
    "TokenAccountInstructions",
    "TokenAccountPreparer",
    "AssociatedTokenAccountPreparer",
    "create_associated_token_account_idempotent",
    "transfer_lamports",
    "sync_native",
    "close_account",
]
