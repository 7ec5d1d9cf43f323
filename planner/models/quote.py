"""Swap quote types.

A quote is a tagged union over ``SwapMode``. Consumers switch on
``quote.mode``; they never check which fields are present.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypeAlias

from planner.models.intent import SwapMode


@dataclass(frozen=True)
class ExactInSwapQuote:
    """Quote for an exact-input swap.

    Attributes:
        token_in: The fixed input amount
        token_est_out: Estimated output after transfer fees
        token_min_out: Slippage-adjusted minimum acceptable output
        trade_fee: Pool fee charged, in input token units
    """

    token_in: int
    token_est_out: int
    token_min_out: int
    trade_fee: int = 0
    mode: Literal[SwapMode.EXACT_IN] = field(default=SwapMode.EXACT_IN, init=False)


@dataclass(frozen=True)
class ExactOutSwapQuote:
    """Quote for an exact-output swap.

    Attributes:
        token_out: The fixed output amount
        token_est_in: Estimated input including transfer fees
        token_max_in: Slippage-adjusted maximum acceptable input
        trade_fee: Pool fee charged, in input token units
    """

    token_out: int
    token_est_in: int
    token_max_in: int
    trade_fee: int = 0
    mode: Literal[SwapMode.EXACT_OUT] = field(default=SwapMode.EXACT_OUT, init=False)


SwapQuote: TypeAlias = ExactInSwapQuote | ExactOutSwapQuote

__all__ = ["ExactInSwapQuote", "ExactOutSwapQuote", "SwapQuote"]
