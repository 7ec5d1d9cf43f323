"""Tests for token account preparation."""

import asyncio

import pytest

from planner.accounts.pda import get_associated_token_address
from planner.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    NATIVE_MINT,
    SYSTEM_PROGRAM_ID,
    TOKEN_2022_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from planner.errors import MintResolutionError
from planner.token.accounts import AssociatedTokenAccountPreparer
from planner.token.instructions import (
    ATA_CREATE_IDEMPOTENT,
    TOKEN_CLOSE_ACCOUNT,
    TOKEN_SYNC_NATIVE,
    create_associated_token_account_idempotent,
)
from tests.helpers import AUTHORITY, MINT_A, MINT_B, FakeLedgerClient, add_token_account


def prepare(client, requirements, token_programs=None):
    preparer = AssociatedTokenAccountPreparer(client)
    return asyncio.run(preparer.prepare(AUTHORITY, requirements, token_programs))


class TestCreateAssociatedTokenAccount:
    def test_instruction_layout(self):
        ix = create_associated_token_account_idempotent(AUTHORITY, AUTHORITY, MINT_A)

        assert ix.program_id == ASSOCIATED_TOKEN_PROGRAM_ID
        assert bytes(ix.data) == bytes([ATA_CREATE_IDEMPOTENT])
        assert [meta.pubkey for meta in ix.accounts] == [
            AUTHORITY,
            get_associated_token_address(AUTHORITY, MINT_A),
            AUTHORITY,
            MINT_A,
            SYSTEM_PROGRAM_ID,
            TOKEN_PROGRAM_ID,
        ]
        assert ix.accounts[0].is_signer


class TestAssociatedTokenAccountPreparer:
    """Tests for ATA creation and SOL wrapping."""

    def test_missing_accounts_are_created(self):
        client = FakeLedgerClient()
        programs = {MINT_A: TOKEN_PROGRAM_ID, MINT_B: TOKEN_2022_PROGRAM_ID}

        result = prepare(client, {MINT_A: 100, MINT_B: 0}, programs)

        assert result.create_instructions == (
            create_associated_token_account_idempotent(AUTHORITY, AUTHORITY, MINT_A, TOKEN_PROGRAM_ID),
            create_associated_token_account_idempotent(AUTHORITY, AUTHORITY, MINT_B, TOKEN_2022_PROGRAM_ID),
        )
        assert result.cleanup_instructions == ()
        assert result.token_account_addresses == {
            MINT_A: get_associated_token_address(AUTHORITY, MINT_A, TOKEN_PROGRAM_ID),
            MINT_B: get_associated_token_address(AUTHORITY, MINT_B, TOKEN_2022_PROGRAM_ID),
        }

    def test_existing_accounts_are_reused(self):
        client = FakeLedgerClient()
        add_token_account(client, AUTHORITY, MINT_A)
        add_token_account(client, AUTHORITY, MINT_B)

        result = prepare(client, {MINT_A: 100, MINT_B: 0}, {MINT_A: TOKEN_PROGRAM_ID, MINT_B: TOKEN_PROGRAM_ID})

        assert result.create_instructions == ()
        assert result.cleanup_instructions == ()

    def test_token_programs_looked_up_when_unknown(self):
        """Without known programs the mint owners are fetched."""
        client = FakeLedgerClient()
        client.add_account(MINT_A, TOKEN_2022_PROGRAM_ID)
        client.add_account(MINT_B, TOKEN_PROGRAM_ID)

        result = prepare(client, {MINT_A: 1, MINT_B: 0})

        assert client.account_requests[0] == [MINT_A, MINT_B]
        assert result.token_account_addresses[MINT_A] == get_associated_token_address(
            AUTHORITY, MINT_A, TOKEN_2022_PROGRAM_ID
        )

    def test_unknown_mint_rejected(self):
        client = FakeLedgerClient()
        with pytest.raises(MintResolutionError):
            prepare(client, {MINT_A: 1})

    def test_native_input_wrapped_and_closed(self):
        """A fresh wrapped-SOL account is funded, synced, then closed after the swap."""
        client = FakeLedgerClient()

        result = prepare(client, {NATIVE_MINT: 5_000, MINT_B: 0}, {MINT_B: TOKEN_PROGRAM_ID})

        create = result.create_instructions
        assert [ix.program_id for ix in create] == [
            ASSOCIATED_TOKEN_PROGRAM_ID,
            SYSTEM_PROGRAM_ID,
            TOKEN_PROGRAM_ID,
            ASSOCIATED_TOKEN_PROGRAM_ID,
        ]
        assert bytes(create[2].data) == bytes([TOKEN_SYNC_NATIVE])

        (close,) = result.cleanup_instructions
        assert bytes(close.data) == bytes([TOKEN_CLOSE_ACCOUNT])
        assert close.accounts[0].pubkey == get_associated_token_address(AUTHORITY, NATIVE_MINT)

    def test_existing_native_account_is_topped_up_not_closed(self):
        client = FakeLedgerClient()
        add_token_account(client, AUTHORITY, NATIVE_MINT)
        add_token_account(client, AUTHORITY, MINT_B)

        result = prepare(client, {NATIVE_MINT: 5_000, MINT_B: 0}, {MINT_B: TOKEN_PROGRAM_ID})

        assert [ix.program_id for ix in result.create_instructions] == [
            SYSTEM_PROGRAM_ID,
            TOKEN_PROGRAM_ID,
        ]
        assert result.cleanup_instructions == ()

    def test_native_output_unwrapped(self):
        """Receiving SOL into a fresh account closes it after the swap."""
        client = FakeLedgerClient()
        add_token_account(client, AUTHORITY, MINT_A)

        result = prepare(client, {MINT_A: 100, NATIVE_MINT: 0}, {MINT_A: TOKEN_PROGRAM_ID})

        assert [ix.program_id for ix in result.create_instructions] == [ASSOCIATED_TOKEN_PROGRAM_ID]
        assert len(result.cleanup_instructions) == 1
