"""Swap instruction data encoding for the Fusion program.

Anchor-style layout: 8-byte discriminator followed by little-endian
Borsh-encoded arguments.
"""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass, field
from enum import IntEnum

from planner.constants import NO_SQRT_PRICE_LIMIT
from planner.models.types import U64_MAX

U128_MAX = 2**128 - 1


def anchor_discriminator(name: str) -> bytes:
    """Anchor instruction discriminator: sha256("global:{name}")[:8]."""
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


SWAP_DISCRIMINATOR = anchor_discriminator("swap")


class AccountsType(IntEnum):
    """Kinds of trailing account slices the program understands."""

    TRANSFER_HOOK_A = 0
    TRANSFER_HOOK_B = 1
    TRANSFER_HOOK_REWARD = 2
    TRANSFER_HOOK_INPUT = 3
    TRANSFER_HOOK_INTERMEDIATE = 4
    TRANSFER_HOOK_OUTPUT = 5
    SUPPLEMENTAL_TICK_ARRAYS = 6
    SUPPLEMENTAL_TICK_ARRAYS_ONE = 7
    SUPPLEMENTAL_TICK_ARRAYS_TWO = 8


@dataclass(frozen=True)
class RemainingAccountsSlice:
    """``length`` trailing accounts to be read as ``accounts_type``."""

    accounts_type: AccountsType
    length: int


@dataclass(frozen=True)
class RemainingAccountsInfo:
    """Describes the accounts appended after the fixed schema, in order."""

    slices: tuple[RemainingAccountsSlice, ...] = field(default_factory=tuple)

    @property
    def total_length(self) -> int:
        return sum(s.length for s in self.slices)

    def encode(self) -> bytes:
        data = struct.pack("<I", len(self.slices))
        for s in self.slices:
            data += struct.pack("<BB", int(s.accounts_type), s.length)
        return data


@dataclass(frozen=True)
class SwapInstructionArgs:
    """Scalar arguments of the swap instruction.

    Attributes:
        amount: The amount the caller fixed (input for exact-in, output for exact-out)
        other_amount_threshold: Minimum output (exact-in) or maximum input (exact-out)
        amount_specified_is_input: True for exact-in
        a_to_b: Trade direction
        sqrt_price_limit: Price limit, 0 for none
        remaining_accounts_info: Layout of the trailing accounts
    """

    amount: int
    other_amount_threshold: int
    amount_specified_is_input: bool
    a_to_b: bool
    sqrt_price_limit: int = NO_SQRT_PRICE_LIMIT
    remaining_accounts_info: RemainingAccountsInfo | None = None

    def __post_init__(self) -> None:
        for name in ("amount", "other_amount_threshold"):
            value = getattr(self, name)
            if not 0 <= value <= U64_MAX:
                raise ValueError(f"{name} out of u64 range: {value}")
        if not 0 <= self.sqrt_price_limit <= U128_MAX:
            raise ValueError(f"sqrt_price_limit out of u128 range: {self.sqrt_price_limit}")

    def encode(self) -> bytes:
        """Encode as instruction data (discriminator included)."""
        data = SWAP_DISCRIMINATOR
        data += struct.pack("<QQ", self.amount, self.other_amount_threshold)
        # u128 as two u64s (little-endian)
        data += struct.pack(
            "<QQ", self.sqrt_price_limit & U64_MAX, self.sqrt_price_limit >> 64
        )
        data += struct.pack("<??", self.amount_specified_is_input, self.a_to_b)
        if self.remaining_accounts_info is None:
            data += b"\x00"
        else:
            data += b"\x01" + self.remaining_accounts_info.encode()
        return data


def decode_swap_instruction_args(data: bytes) -> SwapInstructionArgs:
    """Decode swap instruction data produced by ``SwapInstructionArgs.encode``.

    Raises:
        ValueError: If the discriminator does not match or data is truncated
    """
    if data[:8] != SWAP_DISCRIMINATOR:
        raise ValueError("Not a swap instruction")
    try:
        amount, threshold, limit_lo, limit_hi = struct.unpack_from("<QQQQ", data, 8)
        is_input, a_to_b = struct.unpack_from("<??", data, 40)
        offset = 42
        remaining: RemainingAccountsInfo | None = None
        if data[offset]:
            (count,) = struct.unpack_from("<I", data, offset + 1)
            offset += 5
            slices = []
            for _ in range(count):
                accounts_type, length = struct.unpack_from("<BB", data, offset)
                slices.append(RemainingAccountsSlice(AccountsType(accounts_type), length))
                offset += 2
            remaining = RemainingAccountsInfo(tuple(slices))
    except (struct.error, IndexError) as err:
        raise ValueError(f"Truncated swap instruction data: {err}") from err

    return SwapInstructionArgs(
        amount=amount,
        other_amount_threshold=threshold,
        amount_specified_is_input=is_input,
        a_to_b=a_to_b,
        sqrt_price_limit=limit_lo | (limit_hi << 64),
        remaining_accounts_info=remaining,
    )


__all__ = [
    "SWAP_DISCRIMINATOR",
    "anchor_discriminator",
    "AccountsType",
    "RemainingAccountsSlice",
    "RemainingAccountsInfo",
    "SwapInstructionArgs",
    "decode_swap_instruction_args",
]
