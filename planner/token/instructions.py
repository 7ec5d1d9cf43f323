"""SPL Token and Associated Token Account instruction builders."""

from __future__ import annotations

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer

from planner.accounts.pda import get_associated_token_address
from planner.constants import ASSOCIATED_TOKEN_PROGRAM_ID, SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID

# Associated Token Account program instruction index
ATA_CREATE_IDEMPOTENT = 1

# SPL Token instruction indexes (shared by Token-2022)
TOKEN_CLOSE_ACCOUNT = 9
TOKEN_SYNC_NATIVE = 17


def create_associated_token_account_idempotent(
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Create the owner's ATA for ``mint``; a no-op if it already exists."""
    ata = get_associated_token_address(owner, mint, token_program)
    accounts = [
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(ata, is_signer=False, is_writable=True),
        AccountMeta(owner, is_signer=False, is_writable=False),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(token_program, is_signer=False, is_writable=False),
    ]
    return Instruction(ASSOCIATED_TOKEN_PROGRAM_ID, bytes([ATA_CREATE_IDEMPOTENT]), accounts)


def transfer_lamports(source: Pubkey, destination: Pubkey, lamports: int) -> Instruction:
    """System transfer, used to fund a wrapped-SOL account."""
    return transfer(TransferParams(from_pubkey=source, to_pubkey=destination, lamports=lamports))


def sync_native(account: Pubkey, token_program: Pubkey = TOKEN_PROGRAM_ID) -> Instruction:
    """Sync a wrapped-SOL account's token amount with its lamports."""
    return Instruction(
        token_program,
        bytes([TOKEN_SYNC_NATIVE]),
        [AccountMeta(account, is_signer=False, is_writable=True)],
    )


def close_account(
    account: Pubkey,
    destination: Pubkey,
    owner: Pubkey,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Close a token account, sending its lamports to ``destination``."""
    accounts = [
        AccountMeta(account, is_signer=False, is_writable=True),
        AccountMeta(destination, is_signer=False, is_writable=True),
        AccountMeta(owner, is_signer=True, is_writable=False),
    ]
    return Instruction(token_program, bytes([TOKEN_CLOSE_ACCOUNT]), accounts)


__all__ = [
    "create_associated_token_account_idempotent",
    "transfer_lamports",
    "sync_native",
    "close_account",
]
