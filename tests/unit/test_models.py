"""Tests for domain models and shared types."""

import pytest
from pydantic import ValidationError

from planner.api.schemas import SwapRequest
from planner.constants import TICK_ARRAY_SIZE
from planner.models.intent import SwapIntent, SwapMode
from planner.models.plan import SwapPlan
from planner.models.quote import ExactInSwapQuote, ExactOutSwapQuote
from planner.models.tick_array import EMPTY_TICK, Tick, TickArray
from planner.models.types import U64_MAX, to_pubkey
from tests.helpers import MINT_A, MINT_B, OTHER_MINT, make_pool


class TestPoolState:
    def test_is_token_a(self):
        pool = make_pool()
        assert pool.is_token_a(MINT_A) is True
        assert pool.is_token_a(MINT_B) is False

    def test_foreign_mint(self):
        pool = make_pool()
        assert pool.has_mint(OTHER_MINT) is False
        with pytest.raises(ValueError):
            pool.is_token_a(OTHER_MINT)

    def test_mints(self):
        assert make_pool().mints == (MINT_A, MINT_B)


class TestTickArray:
    def test_uninitialized_is_all_empty(self):
        array = TickArray.uninitialized(-5632)
        assert array.start_tick_index == -5632
        assert len(array.ticks) == TICK_ARRAY_SIZE
        assert all(tick == EMPTY_TICK for tick in array.ticks)

    def test_wrong_size_rejected(self):
        with pytest.raises(ValueError):
            TickArray(start_tick_index=0, ticks=(EMPTY_TICK,) * (TICK_ARRAY_SIZE - 1))

    def test_tick_is_empty(self):
        assert Tick().is_empty
        assert not Tick(liquidity_net=-1).is_empty


class TestIntentAndQuote:
    def test_intent_constructors(self):
        assert SwapIntent.exact_in(5, MINT_A) == SwapIntent(SwapMode.EXACT_IN, 5, MINT_A)
        assert SwapIntent.exact_out(5, MINT_A).is_exact_input is False

    def test_quote_tags(self):
        """Each quote variant carries its mode tag and it cannot be overridden."""
        assert ExactInSwapQuote(1, 1, 1).mode is SwapMode.EXACT_IN
        assert ExactOutSwapQuote(1, 1, 1).mode is SwapMode.EXACT_OUT
        with pytest.raises(TypeError):
            ExactInSwapQuote(1, 1, 1, 0, SwapMode.EXACT_OUT)  # type: ignore[call-arg]

    def test_plan_instruction_count(self):
        plan = SwapPlan(quote=ExactInSwapQuote(1, 1, 1), instructions=(), a_to_b=True, tick_arrays=())
        assert plan.instruction_count == 0


class TestSwapRequest:
    """Tests for request validation."""

    def test_amount_accepts_int_and_string(self):
        for amount in (1_000, "1000"):
            request = SwapRequest(mode="exactIn", amount=amount, mint=str(MINT_A))
            assert request.amount == 1_000

    def test_amount_overflow_rejected(self):
        with pytest.raises(ValidationError):
            SwapRequest(mode="exactIn", amount=str(U64_MAX + 1), mint=str(MINT_A))

    def test_bool_amount_rejected(self):
        with pytest.raises(ValidationError):
            SwapRequest(mode="exactIn", amount=True, mint=str(MINT_A))

    def test_invalid_mint_rejected(self):
        with pytest.raises(ValidationError):
            SwapRequest(mode="exactIn", amount=1, mint="0xabc")

    def test_alias_and_field_name(self):
        by_alias = SwapRequest.model_validate(
            {"mode": "exactOut", "amount": 1, "mint": str(MINT_A), "slippageToleranceBps": 5}
        )
        by_name = SwapRequest(mode="exactOut", amount=1, mint=str(MINT_A), slippage_tolerance_bps=5)
        assert by_alias == by_name

    def test_to_intent(self):
        request = SwapRequest(mode="exactOut", amount="42", mint=str(MINT_B))
        assert request.to_intent() == SwapIntent.exact_out(42, MINT_B)

    def test_to_pubkey(self):
        assert to_pubkey(str(MINT_A)) == MINT_A
        assert to_pubkey(MINT_A) is MINT_A
        with pytest.raises(ValueError):
            to_pubkey("nope")
