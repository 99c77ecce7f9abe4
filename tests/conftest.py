"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from dex.api.endpoints import get_exchange
from dex.api.main import app
from dex.exchange import Exchange
from dex.pool.ledger import LiquidityLedger
from dex.pool.reserves import ReservePool
from dex.pool.swap import SwapEngine
from tests.helpers import ETHER, OWNER, OWNER_BALANCE, fund, make_exchange


@pytest.fixture
def pool() -> ReservePool:
    """An empty reserve pool."""
    return ReservePool()


@pytest.fixture
def ledger(pool: ReservePool) -> LiquidityLedger:
    """A share ledger over the empty pool fixture."""
    return LiquidityLedger(pool)


@pytest.fixture
def engine(pool: ReservePool) -> SwapEngine:
    """A swap engine over the pool fixture with the default 997/1000 fee."""
    return SwapEngine(pool)


@pytest.fixture
def exchange() -> Exchange:
    """An empty exchange where OWNER holds and has approved 1M of each asset."""
    exchange = make_exchange()
    fund(exchange, OWNER, OWNER_BALANCE, OWNER_BALANCE)
    return exchange


@pytest.fixture
def seeded(exchange: Exchange) -> Exchange:
    """The exchange fixture after OWNER deposited 100 A / 200 B."""
    exchange.add_liquidity(100 * ETHER, 200 * ETHER, OWNER)
    return exchange


# =============================================================================
# API client
# =============================================================================


@pytest.fixture
def api_exchange() -> Exchange:
    """A fresh, empty exchange injected into the API."""
    return make_exchange()


@pytest.fixture
def client(api_exchange: Exchange) -> Iterator[TestClient]:
    """Create a test client whose requests hit the api_exchange fixture."""
    app.dependency_overrides[get_exchange] = lambda: api_exchange
    yield TestClient(app)
    app.dependency_overrides.clear()
