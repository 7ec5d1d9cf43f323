"""Account codec protocol.

Byte layouts of the pool and tick-array accounts are generated from the
program's interface descriptor, so the planner takes a decoder as a
collaborator instead of hard-coding the layouts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from planner.accounts.client import RawAccount
    from planner.models.pool import PoolState
    from planner.models.tick_array import TickArray


class AccountCodec(Protocol):
    """Decodes raw pool and tick-array accounts into planner models."""

    def decode_pool(self, account: RawAccount) -> PoolState:
        """Decode a pool account.

        The returned PoolState must carry ``account.address`` and
        ``account.owner`` as its address and program address.
        """
        ...

    def decode_tick_array(self, account: RawAccount) -> TickArray:
        """Decode a tick array account."""
        ...


__all__ = ["AccountCodec"]
