"""Quote dispatch.

The curve and order-book math lives behind the ``SwapQuoter`` protocol; this
module picks the exact-input or exact-output entry point from the intent's
tag and hands it the tick-array data, both transfer fees and the slippage
tolerance.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

import structlog

from planner.constants import BPS_DENOMINATOR
from planner.errors import InvalidIntentError, QuoteMismatchError
from planner.fees.transfer_fee import apply_transfer_fee, reverse_apply_transfer_fee
from planner.models.intent import SwapIntent, SwapMode
from planner.models.quote import ExactInSwapQuote, ExactOutSwapQuote, SwapQuote

if TYPE_CHECKING:
    from planner.fees.transfer_fee import TransferFee
    from planner.models.pool import PoolState
    from planner.models.tick_array import TickArray

logger = structlog.get_logger()

# Pool fee_rate is expressed in hundredths of a basis point
FEE_RATE_DENOMINATOR = 1_000_000


class SwapQuoter(Protocol):
    """Protocol for swap quoting functions.

    Implementations must be pure: identical inputs give identical quotes.
    Slippage is applied by the quoter, not by its callers.
    """

    def quote_exact_in(
        self,
        token_in: int,
        specified_is_token_a: bool,
        slippage_tolerance_bps: int,
        pool: PoolState,
        tick_arrays: Sequence[TickArray],
        transfer_fee_a: TransferFee | None,
        transfer_fee_b: TransferFee | None,
    ) -> ExactInSwapQuote:
        """Quote spending exactly ``token_in`` of the specified token."""
        ...

    def quote_exact_out(
        self,
        token_out: int,
        specified_is_token_a: bool,
        slippage_tolerance_bps: int,
        pool: PoolState,
        tick_arrays: Sequence[TickArray],
        transfer_fee_a: TransferFee | None,
        transfer_fee_b: TransferFee | None,
    ) -> ExactOutSwapQuote:
        """Quote receiving exactly ``token_out`` of the specified token."""
        ...


def min_amount_with_slippage(amount: int, slippage_tolerance_bps: int) -> int:
    """Lower bound of ``amount`` under slippage (rounded down)."""
    return amount * (BPS_DENOMINATOR - slippage_tolerance_bps) // BPS_DENOMINATOR


def max_amount_with_slippage(amount: int, slippage_tolerance_bps: int) -> int:
    """Upper bound of ``amount`` under slippage (rounded up)."""
    numerator = amount * (BPS_DENOMINATOR + slippage_tolerance_bps)
    return (numerator + BPS_DENOMINATOR - 1) // BPS_DENOMINATOR


def validate_slippage(slippage_tolerance_bps: int) -> None:
    """Slippage must be an integer number of basis points in [0, 10_000].

    Raises:
        InvalidIntentError: If the value is out of range or not an int
    """
    if isinstance(slippage_tolerance_bps, bool) or not isinstance(slippage_tolerance_bps, int):
        raise InvalidIntentError(
            f"Slippage tolerance must be an integer bps value, got {slippage_tolerance_bps!r}"
        )
    if slippage_tolerance_bps < 0:
        raise InvalidIntentError(
            f"Slippage tolerance must be non-negative, got {slippage_tolerance_bps}"
        )
    if slippage_tolerance_bps > BPS_DENOMINATOR:
        raise InvalidIntentError(
            f"Slippage tolerance cannot exceed {BPS_DENOMINATOR} bps, got {slippage_tolerance_bps}"
        )


def get_swap_quote(
    quoter: SwapQuoter,
    intent: SwapIntent,
    pool: PoolState,
    transfer_fee_a: TransferFee | None,
    transfer_fee_b: TransferFee | None,
    tick_arrays: Sequence[TickArray],
    specified_is_token_a: bool,
    slippage_tolerance_bps: int,
) -> SwapQuote:
    """Dispatch to the exact-input or exact-output quoter.

    Args:
        quoter: Quoting implementation
        intent: The swap intent; its mode alone selects the entry point
        pool: Pool snapshot
        transfer_fee_a: Effective transfer fee of token A, if any
        transfer_fee_b: Effective transfer fee of token B, if any
        tick_arrays: Tick array data in window order (addresses not needed)
        specified_is_token_a: Whether ``intent.amount`` is denominated in token A
        slippage_tolerance_bps: Slippage tolerance in basis points

    Returns:
        A quote whose mode matches the intent

    Raises:
        InvalidIntentError: If the slippage is invalid
        QuoteMismatchError: If the quoter returns the wrong quote variant
    """
    validate_slippage(slippage_tolerance_bps)
    tick_arrays = list(tick_arrays)

    quote: SwapQuote
    if intent.mode is SwapMode.EXACT_IN:
        quote = quoter.quote_exact_in(
            intent.amount,
            specified_is_token_a,
            slippage_tolerance_bps,
            pool,
            tick_arrays,
            transfer_fee_a,
            transfer_fee_b,
        )
    elif intent.mode is SwapMode.EXACT_OUT:
        quote = quoter.quote_exact_out(
            intent.amount,
            specified_is_token_a,
            slippage_tolerance_bps,
            pool,
            tick_arrays,
            transfer_fee_a,
            transfer_fee_b,
        )
    else:
        raise InvalidIntentError(f"Unknown swap mode: {intent.mode!r}")

    if quote.mode is not intent.mode:
        raise QuoteMismatchError(
            f"Quoter returned a {quote.mode.value} quote for a {intent.mode.value} intent"
        )

    logger.debug(
        "swap_quote_computed",
        pool=str(pool.address),
        mode=intent.mode.value,
        amount=intent.amount,
        specified_is_token_a=specified_is_token_a,
        slippage_tolerance_bps=slippage_tolerance_bps,
    )
    return quote


class MockSwapQuoter:
    """Deterministic rate-based quoter for testing and dry runs.

    Prices every swap at a fixed ``rate`` (numerator, denominator) of output
    per unit of input, in both directions, ignoring tick liquidity. Transfer
    fees, the pool fee rate and slippage are applied the way a real quoter
    applies them, so thresholds and fee plumbing can be checked end to end.
    Calls are recorded for assertions.
    """

    def __init__(self, rate: tuple[int, int] = (1, 1)) -> None:
        """Initialize mock quoter.

        Args:
            rate: (numerator, denominator); output = input * num // denom.
                  Example: (1, 1) for 1:1, (3, 2) for 1.5 output per input
        """
        num, denom = rate
        if num <= 0 or denom <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        self.rate = rate
        # (method, amount, specified_is_token_a, slippage_bps, tick_arrays, fee_a, fee_b)
        self.calls: list[tuple] = []

    def quote_exact_in(
        self,
        token_in: int,
        specified_is_token_a: bool,
        slippage_tolerance_bps: int,
        pool: PoolState,
        tick_arrays: Sequence[TickArray],
        transfer_fee_a: TransferFee | None,
        transfer_fee_b: TransferFee | None,
    ) -> ExactInSwapQuote:
        """Exact input: the specified token is the input token."""
        self.calls.append(
            (
                "exact_in",
                token_in,
                specified_is_token_a,
                slippage_tolerance_bps,
                list(tick_arrays),
                transfer_fee_a,
                transfer_fee_b,
            )
        )
        fee_in, fee_out = (
            (transfer_fee_a, transfer_fee_b)
            if specified_is_token_a
            else (transfer_fee_b, transfer_fee_a)
        )
        num, denom = self.rate

        received_by_pool = apply_transfer_fee(token_in, fee_in)
        trade_fee = -(-received_by_pool * pool.fee_rate // FEE_RATE_DENOMINATOR)
        # Floor for output (conservative for receiver)
        pool_out = (received_by_pool - trade_fee) * num // denom
        token_est_out = apply_transfer_fee(pool_out, fee_out)

        return ExactInSwapQuote(
            token_in=token_in,
            token_est_out=token_est_out,
            token_min_out=min_amount_with_slippage(token_est_out, slippage_tolerance_bps),
            trade_fee=trade_fee,
        )

    def quote_exact_out(
        self,
        token_out: int,
        specified_is_token_a: bool,
        slippage_tolerance_bps: int,
        pool: PoolState,
        tick_arrays: Sequence[TickArray],
        transfer_fee_a: TransferFee | None,
        transfer_fee_b: TransferFee | None,
    ) -> ExactOutSwapQuote:
        """Exact output: the specified token is the output token."""
        self.calls.append(
            (
                "exact_out",
                token_out,
                specified_is_token_a,
                slippage_tolerance_bps,
                list(tick_arrays),
                transfer_fee_a,
                transfer_fee_b,
            )
        )
        fee_out, fee_in = (
            (transfer_fee_a, transfer_fee_b)
            if specified_is_token_a
            else (transfer_fee_b, transfer_fee_a)
        )
        num, denom = self.rate

        pool_out = reverse_apply_transfer_fee(token_out, fee_out)
        # Ceiling for input (conservative for payer)
        net_in = (pool_out * denom + num - 1) // num
        gross_in = -(-net_in * FEE_RATE_DENOMINATOR // (FEE_RATE_DENOMINATOR - pool.fee_rate))
        token_est_in = reverse_apply_transfer_fee(gross_in, fee_in)

        return ExactOutSwapQuote(
            token_out=token_out,
            token_est_in=token_est_in,
            token_max_in=max_amount_with_slippage(token_est_in, slippage_tolerance_bps),
            trade_fee=gross_in - net_in,
        )


__all__ = [
    "SwapQuoter",
    "MockSwapQuoter",
    "get_swap_quote",
    "validate_slippage",
    "min_amount_with_slippage",
    "max_amount_with_slippage",
    "FEE_RATE_DENOMINATOR",
]
