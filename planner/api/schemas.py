"""Pydantic request/response models for the planner API."""

from __future__ import annotations

import base64

from pydantic import BaseModel, Field
from solders.instruction import Instruction

from planner.models.intent import SwapIntent, SwapMode
from planner.models.plan import SwapPlan
from planner.models.quote import SwapQuote
from planner.models.types import U64, Address, to_pubkey


class SwapRequest(BaseModel):
    """Body of a swap planning request."""

    mode: SwapMode
    amount: U64
    mint: Address
    slippage_tolerance_bps: int | None = Field(
        default=None,
        alias="slippageToleranceBps",
        ge=0,
        le=10_000,
        description="Slippage tolerance in basis points (default from host config).",
    )
    authority: Address | None = Field(
        default=None,
        description="Wallet executing the swap (default from host config).",
    )

    model_config = {"populate_by_name": True}

    def to_intent(self) -> SwapIntent:
        return SwapIntent(mode=self.mode, amount=self.amount, mint=to_pubkey(self.mint))


class QuoteResponse(BaseModel):
    """Swap quote, tagged by ``mode``. Amounts are decimal strings."""

    mode: SwapMode
    token_in: str | None = Field(default=None, alias="tokenIn")
    token_est_out: str | None = Field(default=None, alias="tokenEstOut")
    token_min_out: str | None = Field(default=None, alias="tokenMinOut")
    token_out: str | None = Field(default=None, alias="tokenOut")
    token_est_in: str | None = Field(default=None, alias="tokenEstIn")
    token_max_in: str | None = Field(default=None, alias="tokenMaxIn")
    trade_fee: str = Field(alias="tradeFee")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: SwapQuote) -> QuoteResponse:
        if quote.mode is SwapMode.EXACT_IN:
            return cls(
                mode=quote.mode,
                token_in=str(quote.token_in),
                token_est_out=str(quote.token_est_out),
                token_min_out=str(quote.token_min_out),
                trade_fee=str(quote.trade_fee),
            )
        return cls(
            mode=quote.mode,
            token_out=str(quote.token_out),
            token_est_in=str(quote.token_est_in),
            token_max_in=str(quote.token_max_in),
            trade_fee=str(quote.trade_fee),
        )


class AccountMetaResponse(BaseModel):
    """One account reference of an instruction."""

    pubkey: str
    is_signer: bool = Field(alias="isSigner")
    is_writable: bool = Field(alias="isWritable")

    model_config = {"populate_by_name": True}


class InstructionResponse(BaseModel):
    """An instruction with base64-encoded data."""

    program_id: str = Field(alias="programId")
    accounts: list[AccountMetaResponse]
    data: str

    model_config = {"populate_by_name": True}

    @classmethod
    def from_instruction(cls, instruction: Instruction) -> InstructionResponse:
        return cls(
            program_id=str(instruction.program_id),
            accounts=[
                AccountMetaResponse(
                    pubkey=str(meta.pubkey),
                    is_signer=meta.is_signer,
                    is_writable=meta.is_writable,
                )
                for meta in instruction.accounts
            ],
            data=base64.b64encode(bytes(instruction.data)).decode(),
        )


class SwapPlanResponse(BaseModel):
    """Planned swap: quote plus instructions in execution order."""

    quote: QuoteResponse
    instructions: list[InstructionResponse]
    a_to_b: bool = Field(alias="aToB")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_plan(cls, plan: SwapPlan) -> SwapPlanResponse:
        return cls(
            quote=QuoteResponse.from_quote(plan.quote),
            instructions=[InstructionResponse.from_instruction(ix) for ix in plan.instructions],
            a_to_b=plan.a_to_b,
        )


__all__ = [
    "SwapRequest",
    "QuoteResponse",
    "AccountMetaResponse",
    "InstructionResponse",
    "SwapPlanResponse",
]
