import random
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from mock_broker.core.container import container
from mock_broker.mcp.http_transport import create_http_server
from mock_broker.services.accounts import AccountStore
from mock_broker.services.dispatcher import ToolDispatcher
from mock_broker.services.market import MarketModel
from mock_broker.services.order_execution import OrderExecutionEngine


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "asyncio: Async test marker")


class FakeClock:
    """Manually advanced clock for time-gated market ticks."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def market(rng: random.Random, clock: FakeClock) -> MarketModel:
    """Market with the default instruments whose prices only move when the clock is advanced."""
    return MarketModel(rng=rng, clock=clock)


@pytest.fixture
def accounts() -> AccountStore:
    return AccountStore()


@pytest.fixture
def engine(market: MarketModel) -> OrderExecutionEngine:
    return OrderExecutionEngine(market)


@pytest.fixture
def dispatcher(market: MarketModel, accounts: AccountStore) -> ToolDispatcher:
    return ToolDispatcher(market, accounts)


@pytest.fixture
def registered_dispatcher(dispatcher: ToolDispatcher) -> Iterator[ToolDispatcher]:
    """Install the isolated dispatcher in the service container for the test."""
    with container.override(ToolDispatcher, dispatcher):
        yield dispatcher


@pytest.fixture
def client(dispatcher: ToolDispatcher) -> TestClient:
    return TestClient(create_http_server(dispatcher))
