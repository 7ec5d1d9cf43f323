"""Shared type definitions for planner models.

These types are used across the domain models and the API schemas.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field
from solders.pubkey import Pubkey

# Largest value of an on-chain u64 amount
U64_MAX = 2**64 - 1

# Fee growth accumulators are u128 and wrap on overflow
U128_MODULUS = 2**128


def to_pubkey(value: str | Pubkey) -> Pubkey:
    """Coerce a base58 string (or an existing Pubkey) to a Pubkey.

    Raises:
        ValueError: If the string is not a valid 32-byte base58 key
    """
    if isinstance(value, Pubkey):
        return value
    return Pubkey.from_string(value)


def validate_base58_address(value: Any) -> str:
    """Validate that a value is a base58-encoded 32-byte address.

    Args:
        value: Value to validate (string or Pubkey)

    Returns:
        The address as a base58 string

    Raises:
        ValueError: If value is not a valid address
    """
    if isinstance(value, Pubkey):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(f"Address must be a string, got {type(value).__name__}")
    try:
        Pubkey.from_string(value)
    except ValueError as err:
        raise ValueError(f"Invalid base58 address: '{value}'") from err
    return value


def validate_u64(value: Any) -> int:
    """Validate a token amount: accepts int or decimal string, must fit in u64."""
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if value > U64_MAX:
        raise ValueError(f"Amount overflow: {value} > 2^64-1")
    return value


# Base58 Solana address
Address = Annotated[
    str,
    BeforeValidator(validate_base58_address),
    Field(description="Base58-encoded 32-byte address"),
]

# 64-bit unsigned token amount, accepted as int or decimal string
U64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned token amount"),
]

__all__ = ["U64_MAX", "U128_MODULUS", "U64", "Address", "to_pubkey", "validate_base58_address", "validate_u64"]
