"""Pytest configuration and fixtures."""

import pytest

from planner.config import PlannerConfig
from planner.models.pool import PoolState
from planner.swap.planner import SwapPlanner
from planner.swap.quoter import MockSwapQuoter
from planner.token.accounts import AssociatedTokenAccountPreparer
from tests.helpers import FakeAccountCodec, FakeLedgerClient, make_ledger, make_pool


@pytest.fixture
def pool() -> PoolState:
    """Pool at tick 0 with spacing 64 and no tick arrays on the ledger."""
    return make_pool()


@pytest.fixture
def ledger(pool: PoolState) -> tuple[FakeLedgerClient, FakeAccountCodec]:
    """In-memory ledger holding ``pool`` and its two mints."""
    return make_ledger(pool)


@pytest.fixture
def quoter() -> MockSwapQuoter:
    """1:1 quoter that records its calls."""
    return MockSwapQuoter()


def build_planner(
    client: FakeLedgerClient,
    codec: FakeAccountCodec,
    quoter: MockSwapQuoter,
    config: PlannerConfig | None = None,
) -> SwapPlanner:
    """Wire a planner to in-memory collaborators."""
    return SwapPlanner(
        client=client,
        codec=codec,
        quoter=quoter,
        token_accounts=AssociatedTokenAccountPreparer(client),
        config=config or PlannerConfig(),
    )


@pytest.fixture
def planner(ledger, quoter) -> SwapPlanner:
    """Planner over the default ledger, with no configured funder."""
    client, codec = ledger
    return build_planner(client, codec, quoter)
