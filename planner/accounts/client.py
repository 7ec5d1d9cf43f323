"""Ledger read collaborators.

The planner reads three kinds of ledger state: accounts (pool, mints, tick
arrays, token accounts) and the current epoch. Everything goes through the
``LedgerClient`` protocol so tests can substitute an in-memory ledger.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import httpx
import structlog
from solana.exceptions import SolanaRpcException
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey

from planner.errors import LedgerFetchError

if TYPE_CHECKING:
    from solana.rpc.async_api import AsyncClient

logger = structlog.get_logger()

# getMultipleAccounts accepts at most 100 keys per request
MAX_ACCOUNTS_PER_REQUEST = 100

_FETCH_ERRORS = (SolanaRpcException, RPCException, httpx.HTTPError)


@dataclass(frozen=True)
class RawAccount:
    """An account as stored on the ledger."""

    address: Pubkey
    owner: Pubkey
    lamports: int
    data: bytes


class LedgerClient(Protocol):
    """Protocol for ledger reads.

    Implementations return results in input order and use None for accounts
    that do not exist. Transport and RPC failures raise LedgerFetchError.
    """

    async def get_multiple_accounts(self, addresses: Sequence[Pubkey]) -> list[RawAccount | None]:
        """Fetch several accounts in one round trip."""
        ...

    async def get_epoch(self) -> int:
        """Fetch the current epoch."""
        ...


class SolanaLedgerClient:
    """LedgerClient backed by a solana-py ``AsyncClient``.

    No retries happen here: a failed fetch is surfaced to the caller, who owns
    the retry policy.
    """

    def __init__(self, client: AsyncClient | Any, commitment: str = "confirmed") -> None:
        """Initialize the ledger client.

        Args:
            client: solana-py AsyncClient (or anything with the same coroutines)
            commitment: Commitment level for reads
        """
        self.client = client
        self.commitment = Commitment(commitment)

    @classmethod
    def from_url(cls, rpc_url: str, commitment: str = "confirmed") -> SolanaLedgerClient:
        """Create a client talking JSON-RPC over HTTP to ``rpc_url``."""
        from solana.rpc.async_api import AsyncClient

        return cls(AsyncClient(rpc_url), commitment=commitment)

    async def get_multiple_accounts(self, addresses: Sequence[Pubkey]) -> list[RawAccount | None]:
        """Fetch accounts in chunks of MAX_ACCOUNTS_PER_REQUEST, preserving order."""
        addresses = list(addresses)
        results: list[RawAccount | None] = []

        for start in range(0, len(addresses), MAX_ACCOUNTS_PER_REQUEST):
            chunk = addresses[start : start + MAX_ACCOUNTS_PER_REQUEST]
            try:
                resp = await self.client.get_multiple_accounts(chunk, commitment=self.commitment)
            except _FETCH_ERRORS as err:
                logger.warning("ledger_fetch_failed", method="getMultipleAccounts", error=str(err))
                raise LedgerFetchError(f"getMultipleAccounts failed: {err}") from err

            if len(resp.value) != len(chunk):
                raise LedgerFetchError(
                    f"getMultipleAccounts returned {len(resp.value)} accounts for {len(chunk)} keys"
                )

            for address, account in zip(chunk, resp.value, strict=True):
                if account is None:
                    results.append(None)
                    continue
                results.append(
                    RawAccount(
                        address=address,
                        owner=account.owner,
                        lamports=account.lamports,
                        data=bytes(account.data),
                    )
                )

        return results

    async def get_epoch(self) -> int:
        """Fetch the current epoch (never cached)."""
        try:
            resp = await self.client.get_epoch_info(commitment=self.commitment)
        except _FETCH_ERRORS as err:
            logger.warning("ledger_fetch_failed", method="getEpochInfo", error=str(err))
            raise LedgerFetchError(f"getEpochInfo failed: {err}") from err
        return int(resp.value.epoch)


__all__ = ["RawAccount", "LedgerClient", "SolanaLedgerClient", "MAX_ACCOUNTS_PER_REQUEST"]
