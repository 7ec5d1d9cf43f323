"""Token account preparation.

Before a swap the owner needs a token account for each side of the pool, and
native SOL has to be wrapped if it is being spent. The preparer returns the
instructions to run before and after the swap plus the resolved addresses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import structlog
from solders.instruction import Instruction
from solders.pubkey import Pubkey

from planner.accounts.pda import get_associated_token_address
from planner.constants import NATIVE_MINT, TOKEN_PROGRAM_ID
from planner.errors import MintResolutionError
from planner.token.instructions import (
    close_account,
    create_associated_token_account_idempotent,
    sync_native,
    transfer_lamports,
)

if TYPE_CHECKING:
    from planner.accounts.client import LedgerClient

logger = structlog.get_logger()


@dataclass(frozen=True)
class TokenAccountInstructions:
    """Result of token account preparation.

    Attributes:
        create_instructions: Must run before the swap
        cleanup_instructions: Must run after the swap
        token_account_addresses: mint -> owner's token account
    """

    create_instructions: tuple[Instruction, ...] = ()
    cleanup_instructions: tuple[Instruction, ...] = ()
    token_account_addresses: dict[Pubkey, Pubkey] = field(default_factory=dict)


class TokenAccountPreparer(Protocol):
    """Protocol for token account preparation."""

    async def prepare(
        self,
        owner: Pubkey,
        requirements: Mapping[Pubkey, int],
        token_programs: Mapping[Pubkey, Pubkey] | None = None,
    ) -> TokenAccountInstructions:
        """Prepare token accounts for ``owner``.

        Args:
            owner: Wallet that owns the token accounts and pays for them
            requirements: mint -> amount that will be spent from the account
            token_programs: mint -> owning token program, when already known

        Returns:
            TokenAccountInstructions with an address for every required mint
        """
        ...


class AssociatedTokenAccountPreparer:
    """Prepares associated token accounts (ATAs).

    - Missing ATAs are created idempotently.
    - Spending native SOL wraps the required lamports into the native ATA;
      if that ATA was created for this swap it is closed afterwards, which
      unwraps whatever is left.
    - Balances are not checked: sufficiency is the submitter's concern.
    """

    def __init__(self, client: LedgerClient) -> None:
        self.client = client

    async def prepare(
        self,
        owner: Pubkey,
        requirements: Mapping[Pubkey, int],
        token_programs: Mapping[Pubkey, Pubkey] | None = None,
    ) -> TokenAccountInstructions:
        mints = list(requirements)
        programs = dict(token_programs or {})

        missing_programs = [m for m in mints if m not in programs and m != NATIVE_MINT]
        if missing_programs:
            fetched = await self.client.get_multiple_accounts(missing_programs)
            for mint, account in zip(missing_programs, fetched, strict=True):
                if account is None:
                    raise MintResolutionError(mint)
                programs[mint] = account.owner
        programs.setdefault(NATIVE_MINT, TOKEN_PROGRAM_ID)

        addresses = {
            mint: get_associated_token_address(owner, mint, programs[mint]) for mint in mints
        }
        existing = await self.client.get_multiple_accounts([addresses[m] for m in mints])

        create: list[Instruction] = []
        cleanup: list[Instruction] = []

        for mint, account in zip(mints, existing, strict=True):
            token_program = programs[mint]
            ata = addresses[mint]
            if account is None:
                create.append(
                    create_associated_token_account_idempotent(owner, owner, mint, token_program)
                )

            if mint != NATIVE_MINT:
                continue

            amount = requirements[mint]
            if amount > 0:
                create.append(transfer_lamports(owner, ata, amount))
                create.append(sync_native(ata, token_program))
            if account is None:
                cleanup.append(close_account(ata, owner, owner, token_program))

        logger.debug(
            "token_accounts_prepared",
            owner=str(owner),
            mints=[str(m) for m in mints],
            create_count=len(create),
            cleanup_count=len(cleanup),
        )

        return TokenAccountInstructions(
            create_instructions=tuple(create),
            cleanup_instructions=tuple(cleanup),
            token_account_addresses=addresses,
        )


__all__ = [
    "TokenAccountInstructions",
    "TokenAccountPreparer",
    "AssociatedTokenAccountPreparer",
]
