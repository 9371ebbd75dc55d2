"""
Service factory for creating and configuring service instances.

Builds the market model, account store and dispatcher from settings and
registers the dispatcher in the container for the MCP transports.
"""

import random
from typing import TYPE_CHECKING

from mock_broker.core.config import Settings, settings
from mock_broker.core.container import container

if TYPE_CHECKING:
    from mock_broker.services.accounts import AccountStore
    from mock_broker.services.dispatcher import ToolDispatcher
    from mock_broker.services.market import MarketModel


def create_market_model(config: Settings = settings) -> "MarketModel":
    """Create the shared market model, seeded if configured."""
    from mock_broker.services.market import MarketModel

    rng = random.Random(config.MARKET_RANDOM_SEED)
    return MarketModel(rng=rng, refresh_interval=config.MARKET_REFRESH_INTERVAL_SECONDS)


def create_account_store(config: Settings = settings) -> "AccountStore":
    from mock_broker.services.accounts import AccountStore

    return AccountStore(
        default_session_id=config.DEFAULT_SESSION_ID,
        starting_balance=config.STARTING_BALANCE,
    )


def create_dispatcher(config: Settings = settings) -> "ToolDispatcher":
    """Create a dispatcher with fresh market and account state.

    Args:
        config: Settings to build from; defaults to the process settings

    Returns:
        Configured ToolDispatcher instance
    """
    from mock_broker.services.dispatcher import ToolDispatcher
    from mock_broker.services.order_execution import OrderExecutionEngine

    market = create_market_model(config)
    accounts = create_account_store(config)
    execution = OrderExecutionEngine(market, enforce_limits=config.enforce_limits)
    return ToolDispatcher(market, accounts, execution)


def register_services(config: Settings = settings) -> "ToolDispatcher":
    """Register the process-wide dispatcher in the container.

    Safe to call more than once: an existing registration is reused.
    """
    from mock_broker.services.dispatcher import ToolDispatcher

    if container.is_registered(ToolDispatcher):
        return container.get(ToolDispatcher)

    dispatcher = create_dispatcher(config)
    container.register(ToolDispatcher, dispatcher)
    return dispatcher
