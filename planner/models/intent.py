"""Swap intent: what the caller wants to trade."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from solders.pubkey import Pubkey


class SwapMode(str, Enum):
    """Which side of the trade the caller fixes."""

    EXACT_IN = "exactIn"
    EXACT_OUT = "exactOut"


@dataclass(frozen=True)
class SwapIntent:
    """Spend exactly ``amount`` of ``mint`` (EXACT_IN) or receive exactly
    ``amount`` of ``mint`` (EXACT_OUT).

    ``mint`` must be one of the pool's two tokens. Direction is derived from
    ``mode`` and ``mint``; it is never supplied directly.
    """

    mode: SwapMode
    amount: int
    mint: Pubkey

    @classmethod
    def exact_in(cls, amount: int, mint: Pubkey) -> SwapIntent:
        return cls(mode=SwapMode.EXACT_IN, amount=amount, mint=mint)

    @classmethod
    def exact_out(cls, amount: int, mint: Pubkey) -> SwapIntent:
        return cls(mode=SwapMode.EXACT_OUT, amount=amount, mint=mint)

    @property
    def is_exact_input(self) -> bool:
        return self.mode is SwapMode.EXACT_IN


__all__ = ["SwapMode", "SwapIntent"]
