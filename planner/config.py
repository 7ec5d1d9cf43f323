"""Planner configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from solders.pubkey import Pubkey

from planner.constants import BPS_DENOMINATOR, DEFAULT_SLIPPAGE_TOLERANCE_BPS

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"


@dataclass(frozen=True)
class PlannerConfig:
    """Host configuration threaded explicitly through every planning call.

    Attributes:
        rpc_url: JSON-RPC endpoint used by the default ledger client
        slippage_tolerance_bps: Slippage applied when a call does not pass one
        funder: Authority used when a call does not pass one. The default
            (all-zero) key means "unset" and planning calls must then pass
            an authority explicitly.
        commitment: Commitment level for account reads
    """

    rpc_url: str = DEFAULT_RPC_URL
    slippage_tolerance_bps: int = DEFAULT_SLIPPAGE_TOLERANCE_BPS
    funder: Pubkey = field(default_factory=Pubkey.default)
    commitment: str = "confirmed"

    def __post_init__(self) -> None:
        if not 0 <= self.slippage_tolerance_bps <= BPS_DENOMINATOR:
            raise ValueError(
                f"slippage_tolerance_bps must be in [0, {BPS_DENOMINATOR}], "
                f"got {self.slippage_tolerance_bps}"
            )

    @property
    def has_funder(self) -> bool:
        """True if a default funder has been configured."""
        return self.funder != Pubkey.default()

    @classmethod
    def from_env(cls) -> PlannerConfig:
        """Build a config from environment variables.

        - PLANNER_RPC_URL: RPC endpoint (default: mainnet-beta)
        - PLANNER_SLIPPAGE_TOLERANCE_BPS: default slippage (default: 100)
        - PLANNER_FUNDER: base58 default authority (default: unset)
        - PLANNER_COMMITMENT: commitment level (default: confirmed)
        """
        funder_raw = os.environ.get("PLANNER_FUNDER")
        return cls(
            rpc_url=os.environ.get("PLANNER_RPC_URL", DEFAULT_RPC_URL),
            slippage_tolerance_bps=int(
                os.environ.get(
                    "PLANNER_SLIPPAGE_TOLERANCE_BPS", str(DEFAULT_SLIPPAGE_TOLERANCE_BPS)
                )
            ),
            funder=Pubkey.from_string(funder_raw) if funder_raw else Pubkey.default(),
            commitment=os.environ.get("PLANNER_COMMITMENT", "confirmed"),
        )


# Default configuration instance
DEFAULT_PLANNER_CONFIG = PlannerConfig()

__all__ = ["PlannerConfig", "DEFAULT_PLANNER_CONFIG", "DEFAULT_RPC_URL"]
