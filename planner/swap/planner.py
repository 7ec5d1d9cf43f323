"""Swap planning pipeline.

intent -> pool fetch -> (mints, tick-array window, epoch) in parallel ->
transfer fees -> quote -> token accounts -> ordered instructions.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog
from solders.pubkey import Pubkey

from planner.config import DEFAULT_PLANNER_CONFIG, PlannerConfig
from planner.errors import (
    InvalidIntentError,
    MintResolutionError,
    MissingAuthorityError,
    PoolNotFoundError,
)
from planner.fees.mint import MintDecodeError, MintInfo, decode_mint
from planner.fees.transfer_fee import get_current_transfer_fee
from planner.models.intent import SwapIntent, SwapMode
from planner.models.plan import SwapPlan
from planner.models.types import U64_MAX
from planner.swap.assembler import (
    SwapAccounts,
    assemble_swap_instructions,
    build_swap_args,
    build_swap_instruction,
    is_a_to_b,
    max_input_amount,
    token_account_requirements,
)
from planner.swap.quoter import get_swap_quote, validate_slippage
from planner.swap.window import fetch_tick_arrays_or_default

if TYPE_CHECKING:
    from planner.accounts.client import LedgerClient
    from planner.accounts.codec import AccountCodec
    from planner.models.pool import PoolState
    from planner.swap.quoter import SwapQuoter
    from planner.token.accounts import TokenAccountPreparer

logger = structlog.get_logger()


def validate_intent(intent: SwapIntent) -> None:
    """Local checks on an intent, done before any network call.

    Raises:
        InvalidIntentError: If the amount is not a positive u64 or the mode is unknown
    """
    if not isinstance(intent.mode, SwapMode):
        raise InvalidIntentError(f"Unknown swap mode: {intent.mode!r}")
    if isinstance(intent.amount, bool) or not isinstance(intent.amount, int):
        raise InvalidIntentError(f"Swap amount must be an integer, got {intent.amount!r}")
    if intent.amount <= 0:
        raise InvalidIntentError(f"Swap amount must be positive, got {intent.amount}")
    if intent.amount > U64_MAX:
        raise InvalidIntentError(f"Swap amount exceeds u64: {intent.amount}")


class SwapPlanner:
    """Plans swaps against Fusion pools.

    Each call reads a fresh snapshot of ledger state and derives its plan
    from that alone; the planner holds no caches and mutates nothing, so a
    failed or abandoned call can simply be repeated.

    Args:
        client: Ledger reads (accounts and epoch)
        codec: Decoder for pool and tick array accounts
        quoter: Exact-in / exact-out quoting functions
        token_accounts: Token account preparer
        config: Default slippage and funder
    """

    def __init__(
        self,
        client: LedgerClient,
        codec: AccountCodec,
        quoter: SwapQuoter,
        token_accounts: TokenAccountPreparer,
        config: PlannerConfig = DEFAULT_PLANNER_CONFIG,
    ) -> None:
        self.client = client
        self.codec = codec
        self.quoter = quoter
        self.token_accounts = token_accounts
        self.config = config

    @classmethod
    def from_config(
        cls,
        codec: AccountCodec,
        quoter: SwapQuoter,
        config: PlannerConfig = DEFAULT_PLANNER_CONFIG,
    ) -> SwapPlanner:
        """Create a planner reading from ``config.rpc_url`` with associated token accounts."""
        from planner.accounts.client import SolanaLedgerClient
        from planner.token.accounts import AssociatedTokenAccountPreparer

        client = SolanaLedgerClient.from_url(config.rpc_url, config.commitment)
        return cls(client, codec, quoter, AssociatedTokenAccountPreparer(client), config)

    def resolve_authority(self, authority: Pubkey | None) -> Pubkey:
        """Explicit authority, else the configured funder.

        Raises:
            MissingAuthorityError: If neither is set
        """
        if authority is not None and authority != Pubkey.default():
            return authority
        if self.config.has_funder:
            return self.config.funder
        raise MissingAuthorityError("Authority must be provided")

    async def fetch_pool(self, pool_address: Pubkey) -> PoolState:
        """Fetch and decode the pool.

        Raises:
            PoolNotFoundError: If no account exists at ``pool_address``
        """
        (account,) = await self.client.get_multiple_accounts([pool_address])
        if account is None:
            raise PoolNotFoundError(pool_address)
        return self.codec.decode_pool(account)

    async def fetch_mints(self, pool: PoolState) -> tuple[MintInfo, MintInfo]:
        """Fetch and decode both mints in one round trip.

        Raises:
            MintResolutionError: If either mint account is missing
        """
        accounts = await self.client.get_multiple_accounts(list(pool.mints))
        decoded = []
        for mint, account in zip(pool.mints, accounts, strict=True):
            if account is None:
                raise MintResolutionError(mint)
            try:
                decoded.append(decode_mint(mint, account.owner, account.data))
            except MintDecodeError as err:
                raise MintResolutionError(mint, reason="could not be decoded") from err
        return decoded[0], decoded[1]

    async def swap_instructions(
        self,
        intent: SwapIntent,
        pool_address: Pubkey,
        slippage_tolerance_bps: int | None = None,
        authority: Pubkey | None = None,
    ) -> SwapPlan:
        """Plan a swap.

        Args:
            intent: Exact-in or exact-out amount of one of the pool's mints
            pool_address: Pool to trade against
            slippage_tolerance_bps: Slippage tolerance (default from config)
            authority: Wallet executing the swap (default: configured funder)

        Returns:
            SwapPlan with the quote and the ordered instructions

        Raises:
            InvalidIntentError: Bad amount, slippage, or mint not in the pool
            MissingAuthorityError: No authority and no configured funder
            PoolNotFoundError: Pool account does not exist
            MintResolutionError: A pool mint does not exist
            LedgerFetchError: Transport/RPC failure (raised by the client)
        """
        if slippage_tolerance_bps is None:
            slippage_tolerance_bps = self.config.slippage_tolerance_bps
        validate_intent(intent)
        validate_slippage(slippage_tolerance_bps)
        signer = self.resolve_authority(authority)

        pool = await self.fetch_pool(pool_address)
        if not pool.has_mint(intent.mint):
            raise InvalidIntentError(f"Mint {intent.mint} is not in pool {pool_address}")

        (mint_a, mint_b), tick_arrays, current_epoch = await asyncio.gather(
            self.fetch_mints(pool),
            fetch_tick_arrays_or_default(self.client, self.codec, pool),
            self.client.get_epoch(),
        )

        transfer_fee_a = get_current_transfer_fee(mint_a, current_epoch)
        transfer_fee_b = get_current_transfer_fee(mint_b, current_epoch)

        specified_is_token_a = pool.is_token_a(intent.mint)
        quote = get_swap_quote(
            self.quoter,
            intent,
            pool,
            transfer_fee_a,
            transfer_fee_b,
            [t.data for t in tick_arrays],
            specified_is_token_a,
            slippage_tolerance_bps,
        )

        a_to_b = is_a_to_b(specified_is_token_a, intent.mode)
        prepared = await self.token_accounts.prepare(
            signer,
            token_account_requirements(pool, a_to_b, max_input_amount(quote)),
            token_programs={
                pool.token_mint_a: mint_a.program_address,
                pool.token_mint_b: mint_b.program_address,
            },
        )

        swap_instruction = build_swap_instruction(
            pool,
            tick_arrays,
            SwapAccounts(
                token_authority=signer,
                token_program_a=mint_a.program_address,
                token_program_b=mint_b.program_address,
                token_owner_account_a=prepared.token_account_addresses[pool.token_mint_a],
                token_owner_account_b=prepared.token_account_addresses[pool.token_mint_b],
            ),
            build_swap_args(intent, quote, a_to_b),
        )
        instructions = assemble_swap_instructions(
            prepared.create_instructions,
            swap_instruction,
            prepared.cleanup_instructions,
        )

        logger.info(
            "swap_planned",
            pool=str(pool_address),
            mode=intent.mode.value,
            amount=intent.amount,
            a_to_b=a_to_b,
            epoch=current_epoch,
            synthesized_tick_arrays=sum(1 for t in tick_arrays if not t.initialized),
            instruction_count=len(instructions),
        )

        return SwapPlan(
            quote=quote,
            instructions=instructions,
            a_to_b=a_to_b,
            tick_arrays=tuple(tick_arrays),
        )


__all__ = ["SwapPlanner", "validate_intent"]
