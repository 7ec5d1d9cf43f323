"""Program-derived address helpers."""

from __future__ import annotations

from solders.pubkey import Pubkey

from planner.constants import ASSOCIATED_TOKEN_PROGRAM_ID, FUSIONAMM_PROGRAM_ID, TOKEN_PROGRAM_ID


def get_tick_array_address(
    pool: Pubkey,
    start_tick_index: int,
    program_id: Pubkey = FUSIONAMM_PROGRAM_ID,
) -> Pubkey:
    """Derive the tick array PDA for ``(pool, start_tick_index)``.

    Seeds: ["tick_array", pool, decimal start index]
    """
    address, _bump = Pubkey.find_program_address(
        [b"tick_array", bytes(pool), str(start_tick_index).encode()],
        program_id,
    )
    return address


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Derive the associated token account for owner + mint under ``token_program``."""
    address, _bump = Pubkey.find_program_address(
        [bytes(owner), bytes(token_program), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return address


__all__ = ["get_tick_array_address", "get_associated_token_address"]
