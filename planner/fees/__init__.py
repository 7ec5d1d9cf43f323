"""Transfer fee resolution for Token-2022 mints.

This module provides:
- Mint account decoding (base layout plus the TransferFeeConfig extension)
- Epoch-correct selection of the effective transfer fee
- Token-2022 fee arithmetic (forward and reverse)
- Fee quotes for positions (collectable fees) and limit orders

Usage:
    from planner.fees import decode_mint, get_current_transfer_fee

    mint = decode_mint(address, owner, data)
    fee = get_current_transfer_fee(mint, current_epoch)
"""

from planner.fees.mint import (
    EXTENSION_TRANSFER_FEE_CONFIG,
    MINT_SIZE,
    MintDecodeError,
    MintInfo,
    decode_mint,
)
from planner.fees.position import (
    CollectFeesQuote,
    collect_fees_quote,
    fee_growth_inside,
    limit_order_fee,
)
from planner.fees.transfer_fee import (
    EpochTransferFee,
    TransferFee,
    TransferFeeConfig,
    apply_transfer_fee,
    calculate_transfer_fee,
    get_current_transfer_fee,
    reverse_apply_transfer_fee,
)

__all__ = [
    # Mint
    "MintInfo",
    "MintDecodeError",
    "decode_mint",
    "MINT_SIZE",
    "EXTENSION_TRANSFER_FEE_CONFIG",
    # Position and order fees
    "CollectFeesQuote",
    "collect_fees_quote",
    "fee_growth_inside",
    "limit_order_fee",
    # Transfer fee
    "TransferFee",
    "EpochTransferFee",
    "TransferFeeConfig",
    "get_current_transfer_fee",
    "calculate_transfer_fee",
    "apply_transfer_fee",
    "reverse_apply_transfer_fee",
]
