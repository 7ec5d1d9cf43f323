"""SwapPlan: the planner's output."""

from __future__ import annotations

from dataclasses import dataclass

from solders.instruction import Instruction

from planner.models.quote import SwapQuote
from planner.models.tick_array import TickArrayAccount


@dataclass(frozen=True)
class SwapPlan:
    """Ordered instructions plus the quote that justified them.

    Created fresh per planning call and never persisted.
    """

    quote: SwapQuote
    instructions: tuple[Instruction, ...]
    a_to_b: bool
    tick_arrays: tuple[TickArrayAccount, ...]

    @property
    def instruction_count(self) -> int:
        return len(self.instructions)


__all__ = ["SwapPlan"]
