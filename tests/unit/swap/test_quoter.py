"""Tests for quote dispatch and the mock quoter."""

import pytest

from planner.errors import InvalidIntentError, QuoteMismatchError
from planner.fees.transfer_fee import TransferFee
from planner.models.intent import SwapIntent, SwapMode
from planner.models.quote import ExactInSwapQuote, ExactOutSwapQuote
from planner.models.tick_array import TickArray
from planner.swap.quoter import (
    MockSwapQuoter,
    get_swap_quote,
    max_amount_with_slippage,
    min_amount_with_slippage,
    validate_slippage,
)
from tests.helpers import MINT_A, MINT_B, make_pool

WINDOW = [TickArray.uninitialized(start) for start in (0, 5632, 11264, -5632, -11264)]


def quote(quoter, intent, specified_is_token_a=True, slippage=100, fee_a=None, fee_b=None, pool=None):
    return get_swap_quote(
        quoter,
        intent,
        pool or make_pool(),
        fee_a,
        fee_b,
        WINDOW,
        specified_is_token_a,
        slippage,
    )


class TestSlippageHelpers:
    """Tests for slippage bounds."""

    def test_min_rounds_down(self):
        assert min_amount_with_slippage(1_000_000, 100) == 990_000
        assert min_amount_with_slippage(999, 100) == 989  # 989.01

    def test_max_rounds_up(self):
        assert max_amount_with_slippage(500_000, 100) == 505_000
        assert max_amount_with_slippage(999, 100) == 1009  # 1008.99

    def test_zero_slippage_is_identity(self):
        assert min_amount_with_slippage(12345, 0) == 12345
        assert max_amount_with_slippage(12345, 0) == 12345

    def test_validate_slippage(self):
        """Out-of-range, bool and non-int slippage values are rejected."""
        validate_slippage(0)
        validate_slippage(10_000)
        for bad in (-1, 10_001, True, 1.5, "100"):
            with pytest.raises(InvalidIntentError):
                validate_slippage(bad)


class TestDispatch:
    """Tests for mode-based dispatch."""

    def test_exact_in_calls_exact_in_quoter(self):
        """An exact-in intent reaches quote_exact_in with the caller's amount."""
        quoter = MockSwapQuoter()
        result = quote(quoter, SwapIntent.exact_in(1_000_000, MINT_A))

        assert isinstance(result, ExactInSwapQuote)
        assert result.mode is SwapMode.EXACT_IN
        assert quoter.calls[0][0] == "exact_in"
        assert quoter.calls[0][1] == 1_000_000

    def test_exact_out_calls_exact_out_quoter(self):
        quoter = MockSwapQuoter()
        result = quote(quoter, SwapIntent.exact_out(500_000, MINT_B), specified_is_token_a=False)

        assert isinstance(result, ExactOutSwapQuote)
        assert result.mode is SwapMode.EXACT_OUT
        assert quoter.calls[0][0] == "exact_out"
        assert quoter.calls[0][2] is False

    def test_inputs_forwarded(self):
        """Tick arrays, both fees and slippage reach the quoter unchanged."""
        quoter = MockSwapQuoter()
        fee_a = TransferFee(fee_bps=50, max_fee=1_000)
        quote(quoter, SwapIntent.exact_in(10, MINT_A), slippage=250, fee_a=fee_a)

        _, _, _, slippage, tick_arrays, got_fee_a, got_fee_b = quoter.calls[0]
        assert slippage == 250
        assert tick_arrays == WINDOW
        assert got_fee_a == fee_a
        assert got_fee_b is None

    def test_negative_slippage_rejected_before_quoting(self):
        quoter = MockSwapQuoter()
        with pytest.raises(InvalidIntentError):
            quote(quoter, SwapIntent.exact_in(10, MINT_A), slippage=-1)
        assert quoter.calls == []

    def test_wrong_variant_raises(self):
        """A quoter answering with the other variant is rejected."""

        class BackwardsQuoter(MockSwapQuoter):
            def quote_exact_in(self, token_in, *args):
                return ExactOutSwapQuote(token_out=token_in, token_est_in=1, token_max_in=1)

        with pytest.raises(QuoteMismatchError):
            quote(BackwardsQuoter(), SwapIntent.exact_in(10, MINT_A))


class TestMockSwapQuoter:
    """Tests for the deterministic mock quoter."""

    def test_exact_in_one_to_one(self):
        quoter = MockSwapQuoter()
        result = quote(quoter, SwapIntent.exact_in(1_000_000, MINT_A))
        assert result == ExactInSwapQuote(
            token_in=1_000_000, token_est_out=1_000_000, token_min_out=990_000
        )

    def test_exact_out_one_to_one(self):
        quoter = MockSwapQuoter()
        result = quote(quoter, SwapIntent.exact_out(500_000, MINT_B), specified_is_token_a=False)
        assert result == ExactOutSwapQuote(
            token_out=500_000, token_est_in=500_000, token_max_in=505_000
        )

    def test_rate_applied(self):
        """Output is input * num // denom; input is ceil(output * denom / num)."""
        quoter = MockSwapQuoter(rate=(3, 2))
        exact_in = quote(quoter, SwapIntent.exact_in(101, MINT_A), slippage=0)
        exact_out = quote(quoter, SwapIntent.exact_out(100, MINT_B), specified_is_token_a=False, slippage=0)

        assert exact_in.token_est_out == 151
        assert exact_out.token_est_in == 67

    def test_pool_fee_rate_charged(self):
        """A 0.3% pool fee is taken from the input."""
        quoter = MockSwapQuoter()
        result = quote(quoter, SwapIntent.exact_in(1_000_000, MINT_A), slippage=0, pool=make_pool(fee_rate=3_000))
        assert result.trade_fee == 3_000
        assert result.token_est_out == 997_000

    def test_input_transfer_fee_reduces_output(self):
        """Exact-in of token A is charged token A's transfer fee."""
        quoter = MockSwapQuoter()
        fee_a = TransferFee(fee_bps=100, max_fee=10**9)
        result = quote(quoter, SwapIntent.exact_in(1_000_000, MINT_A), slippage=0, fee_a=fee_a)
        assert result.token_est_out == 990_000

    def test_output_transfer_fee_grosses_up_input(self):
        """Exact-out of token B needs more input when token B charges a fee."""
        quoter = MockSwapQuoter()
        fee_b = TransferFee(fee_bps=100, max_fee=10**9)
        result = quote(
            quoter,
            SwapIntent.exact_out(990_000, MINT_B),
            specified_is_token_a=False,
            slippage=0,
            fee_b=fee_b,
        )
        assert result.token_est_in == 1_000_000

    def test_invalid_rate_rejected(self):
        with pytest.raises(ValueError):
            MockSwapQuoter(rate=(0, 1))

    def test_quotes_are_pure(self):
        """Identical inputs produce identical quotes."""
        quoter = MockSwapQuoter(rate=(7, 3))
        intent = SwapIntent.exact_out(123_456, MINT_A)
        assert quote(quoter, intent) == quote(quoter, intent)
