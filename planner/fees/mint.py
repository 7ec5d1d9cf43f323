"""Decoding of SPL Token and Token-2022 mint accounts.

Only the fields the planner needs are decoded: decimals, supply and the
TransferFeeConfig extension.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass

import structlog
from solders.pubkey import Pubkey

from planner.fees.transfer_fee import EpochTransferFee, TransferFeeConfig

logger = structlog.get_logger()

# Base mint layout
MINT_SIZE = 82
_SUPPLY_OFFSET = 36
_DECIMALS_OFFSET = 44
_IS_INITIALIZED_OFFSET = 45

# Token-2022 pads every extended account to the token-account size, then
# writes a one-byte account type followed by TLV entries.
_BASE_ACCOUNT_SIZE = 165
_ACCOUNT_TYPE_MINT = 1
_TLV_HEADER = struct.Struct("<HH")

# Extension type ids
EXTENSION_UNINITIALIZED = 0
EXTENSION_TRANSFER_FEE_CONFIG = 1

# authority(32) + withdraw authority(32) + withheld(u64) + 2 x (epoch u64, max u64, bps u16)
_TRANSFER_FEE_CONFIG = struct.Struct("<32s32sQQQHQQH")


class MintDecodeError(ValueError):
    """Mint account data is malformed."""

    pass


@dataclass(frozen=True)
class MintInfo:
    """Decoded mint account.

    ``program_address`` is the owning token program (Token or Token-2022);
    token accounts and transfers for this mint must go through it.
    """

    address: Pubkey
    program_address: Pubkey
    decimals: int
    supply: int
    transfer_fee_config: TransferFeeConfig | None = None


def decode_mint(address: Pubkey, owner: Pubkey, data: bytes) -> MintInfo:
    """Decode a mint account.

    Args:
        address: Mint address
        owner: Owning token program
        data: Raw account data

    Returns:
        MintInfo with the transfer fee extension if present

    Raises:
        MintDecodeError: If the data is too short or the mint is uninitialized
    """
    if len(data) < MINT_SIZE:
        raise MintDecodeError(f"Mint {address} data too short: {len(data)} bytes")
    if not data[_IS_INITIALIZED_OFFSET]:
        raise MintDecodeError(f"Mint {address} is not initialized")

    (supply,) = struct.unpack_from("<Q", data, _SUPPLY_OFFSET)
    decimals = data[_DECIMALS_OFFSET]

    return MintInfo(
        address=address,
        program_address=owner,
        decimals=decimals,
        supply=supply,
        transfer_fee_config=_parse_transfer_fee_config(address, data),
    )


def _iter_extensions(data: bytes) -> Iterator[tuple[int, bytes]]:
    """Yield (extension_type, value) pairs from the TLV area of a mint."""
    if len(data) <= _BASE_ACCOUNT_SIZE or data[_BASE_ACCOUNT_SIZE] != _ACCOUNT_TYPE_MINT:
        return

    offset = _BASE_ACCOUNT_SIZE + 1
    while offset + _TLV_HEADER.size <= len(data):
        ext_type, length = _TLV_HEADER.unpack_from(data, offset)
        if ext_type == EXTENSION_UNINITIALIZED:
            return
        offset += _TLV_HEADER.size
        if offset + length > len(data):
            raise MintDecodeError(f"Extension {ext_type} overruns account data")
        yield ext_type, data[offset : offset + length]
        offset += length


def _parse_transfer_fee_config(address: Pubkey, data: bytes) -> TransferFeeConfig | None:
    for ext_type, value in _iter_extensions(data):
        if ext_type != EXTENSION_TRANSFER_FEE_CONFIG:
            continue
        if len(value) < _TRANSFER_FEE_CONFIG.size:
            raise MintDecodeError(f"Mint {address} has a truncated TransferFeeConfig")
        (
            _authority,
            _withdraw_authority,
            withheld_amount,
            older_epoch,
            older_max_fee,
            older_bps,
            newer_epoch,
            newer_max_fee,
            newer_bps,
        ) = _TRANSFER_FEE_CONFIG.unpack_from(value)
        logger.debug(
            "mint_transfer_fee_config",
            mint=str(address),
            older_bps=older_bps,
            newer_bps=newer_bps,
            newer_epoch=newer_epoch,
        )
        return TransferFeeConfig(
            older_transfer_fee=EpochTransferFee(older_epoch, older_bps, older_max_fee),
            newer_transfer_fee=EpochTransferFee(newer_epoch, newer_bps, newer_max_fee),
            withheld_amount=withheld_amount,
        )
    return None


__all__ = [
    "MINT_SIZE",
    "EXTENSION_TRANSFER_FEE_CONFIG",
    "MintDecodeError",
    "MintInfo",
    "decode_mint",
]
