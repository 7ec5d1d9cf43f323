"""Token-2022 transfer fee schedules.

A Token-2022 mint with the TransferFeeConfig extension stores two schedules:
the one currently in force and a newer one that activates at a given epoch.
The effective schedule must be picked against the epoch of the call, never
from a cached value, because a fee change can land on any epoch boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from planner.constants import BPS_DENOMINATOR

if TYPE_CHECKING:
    from planner.fees.mint import MintInfo


@dataclass(frozen=True)
class TransferFee:
    """Effective transfer fee: rate in basis points, capped at ``max_fee``."""

    fee_bps: int
    max_fee: int


@dataclass(frozen=True)
class EpochTransferFee:
    """A transfer fee schedule together with the epoch it activates at."""

    epoch: int
    fee_bps: int
    max_fee: int

    def to_transfer_fee(self) -> TransferFee:
        return TransferFee(fee_bps=self.fee_bps, max_fee=self.max_fee)


@dataclass(frozen=True)
class TransferFeeConfig:
    """The TransferFeeConfig mint extension (only the schedule fields)."""

    older_transfer_fee: EpochTransferFee
    newer_transfer_fee: EpochTransferFee
    withheld_amount: int = 0

    def get_epoch_fee(self, epoch: int) -> EpochTransferFee:
        """Schedule whose activation epoch is the greatest one not after ``epoch``."""
        if epoch >= self.newer_transfer_fee.epoch:
            return self.newer_transfer_fee
        return self.older_transfer_fee


def get_current_transfer_fee(mint: MintInfo | None, current_epoch: int) -> TransferFee | None:
    """Resolve the transfer fee in force for a mint at ``current_epoch``.

    Args:
        mint: Decoded mint, or None
        current_epoch: Epoch fetched for this planning call

    Returns:
        The effective TransferFee, or None if the mint carries no fee extension
    """
    if mint is None or mint.transfer_fee_config is None:
        return None
    return mint.transfer_fee_config.get_epoch_fee(current_epoch).to_transfer_fee()


def calculate_transfer_fee(amount: int, fee: TransferFee | None) -> int:
    """Fee withheld when transferring ``amount`` (ceil, capped at max_fee)."""
    if fee is None or fee.fee_bps == 0 or amount == 0:
        return 0
    raw_fee = (amount * fee.fee_bps + BPS_DENOMINATOR - 1) // BPS_DENOMINATOR
    return min(raw_fee, fee.max_fee)


def apply_transfer_fee(amount: int, fee: TransferFee | None) -> int:
    """Amount received after sending ``amount``."""
    return amount - calculate_transfer_fee(amount, fee)


def reverse_apply_transfer_fee(amount: int, fee: TransferFee | None) -> int:
    """Amount that must be sent so that ``amount`` is received.

    Inverse of ``apply_transfer_fee``. When the uncapped gross-up would
    exceed the cap, the cap applies instead.
    """
    if fee is None or fee.fee_bps == 0 or amount == 0:
        return amount
    if fee.fee_bps >= BPS_DENOMINATOR:
        return amount + fee.max_fee

    denominator = BPS_DENOMINATOR - fee.fee_bps
    pre_fee = (amount * BPS_DENOMINATOR + denominator - 1) // denominator
    if pre_fee - amount >= fee.max_fee:
        return amount + fee.max_fee
    return pre_fee


__all__ = [
    "TransferFee",
    "EpochTransferFee",
    "TransferFeeConfig",
    "get_current_transfer_fee",
    "calculate_transfer_fee",
    "apply_transfer_fee",
    "reverse_apply_transfer_fee",
]
