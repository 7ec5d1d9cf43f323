"""Protocol constants for the Fusion swap planner.

Centralizes well-known program addresses and protocol parameters.
"""

from solders.pubkey import Pubkey


def _validate_program_address(name: str, address: str) -> Pubkey:
    """Parse a base58 address, failing loudly at import time.

    Args:
        name: Name of the account (for error messages)
        address: Base58-encoded address

    Returns:
        The parsed Pubkey

    Raises:
        ValueError: If the address is not a valid 32-byte base58 key
    """
    try:
        return Pubkey.from_string(address)
    except ValueError as err:
        raise ValueError(f"Invalid {name} address: {address}") from err


# Programs (mainnet and devnet share these ids)
FUSIONAMM_PROGRAM_ID = _validate_program_address(
    "FusionAMM", "fUSioN9YKKSa3CUC2YUc4tPkHJ5Y6XW1yz8y6F7qWz9"
)
SYSTEM_PROGRAM_ID = _validate_program_address("System", "11111111111111111111111111111111")
TOKEN_PROGRAM_ID = _validate_program_address(
    "Token", "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
)
TOKEN_2022_PROGRAM_ID = _validate_program_address(
    "Token-2022", "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
)
ASSOCIATED_TOKEN_PROGRAM_ID = _validate_program_address(
    "AssociatedToken", "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
MEMO_PROGRAM_ID = _validate_program_address("Memo", "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr")

# Wrapped SOL mint
NATIVE_MINT = _validate_program_address("NativeMint", "So11111111111111111111111111111111111111112")

# Number of tick slots stored in one tick array account
TICK_ARRAY_SIZE = 88

# Basis point denominator (10_000 bps = 100%)
BPS_DENOMINATOR = 10_000

# Limit-order fee splits are expressed in basis points of the pool fee
MAX_ORDER_PROTOCOL_FEE_RATE = 10_000
MAX_CLP_REWARD_RATE = 10_000

# Default slippage tolerance: 1%
DEFAULT_SLIPPAGE_TOLERANCE_BPS = 100

# sqrt_price_limit of 0 tells the program to use the protocol bound for the direction
NO_SQRT_PRICE_LIMIT = 0

__all__ = [
    "FUSIONAMM_PROGRAM_ID",
    "SYSTEM_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "TOKEN_2022_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "MEMO_PROGRAM_ID",
    "NATIVE_MINT",
    "TICK_ARRAY_SIZE",
    "BPS_DENOMINATOR",
    "MAX_ORDER_PROTOCOL_FEE_RATE",
    "MAX_CLP_REWARD_RATE",
    "DEFAULT_SLIPPAGE_TOLERANCE_BPS",
    "NO_SQRT_PRICE_LIMIT",
]
