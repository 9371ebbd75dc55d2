"""
Native FastMCP server exposing the brokerage tools.

Every catalogue tool is registered under its published (hyphenated) name
and delegates to the process-wide dispatcher with the default session,
so stdio clients see the same account and market as HTTP clients that
send no session header.
"""

from collections.abc import Callable
from typing import Any

from fastmcp import FastMCP

from mock_broker.core.config import settings
from mock_broker.mcp.base import get_dispatcher
from mock_broker.mcp.catalogue import (
    ALERTS_URI,
    RESOURCE_CATALOGUE,
    TOOL_CATALOGUE,
    TOOL_NAMES,
)


def _call(tool_name: str, **arguments: Any) -> dict[str, Any]:
    params = {key: value for key, value in arguments.items() if value is not None}
    return get_dispatcher().execute(tool_name, params, settings.DEFAULT_SESSION_ID)


async def init_account() -> dict[str, Any]:
    return _call("init")


async def get_account() -> dict[str, Any]:
    return _call("get-account")


async def get_portfolio() -> dict[str, Any]:
    return _call("get-portfolio")


async def get_holdings() -> dict[str, Any]:
    return _call("get-holdings")


async def get_orders() -> dict[str, Any]:
    return _call("get-orders")


async def get_history(symbol: str, days: int = 30) -> dict[str, Any]:
    return _call("get-history", symbol=symbol, days=days)


async def place_order(
    symbol: str, qty: int, side: str, price: float | None = None
) -> dict[str, Any]:
    return _call("place-order", symbol=symbol, qty=qty, side=side, price=price)


async def get_quote(symbol: str) -> dict[str, Any]:
    return _call("get-quote", symbol=symbol)


async def get_market_news() -> dict[str, Any]:
    return _call("get-market-news")


async def get_market_status() -> dict[str, Any]:
    return _call("get-market-status")


TOOL_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "init": init_account,
    "get-account": get_account,
    "get-portfolio": get_portfolio,
    "get-holdings": get_holdings,
    "get-orders": get_orders,
    "get-history": get_history,
    "place-order": place_order,
    "get-quote": get_quote,
    "get-market-news": get_market_news,
    "get-market-status": get_market_status,
}

if TOOL_FUNCTIONS.keys() != TOOL_NAMES:
    raise RuntimeError("FastMCP tool functions out of sync with the tool catalogue")


def market_alerts() -> str:
    """Real-time market alerts and significant events summary."""
    return get_dispatcher().market.alerts_digest()


def create_mcp_server() -> FastMCP:
    """Build a FastMCP instance with every catalogue tool and resource."""
    server: FastMCP = FastMCP(settings.PROJECT_NAME)

    for tool in TOOL_CATALOGUE:
        server.tool(name=tool["name"], description=tool["description"])(
            TOOL_FUNCTIONS[tool["name"]]
        )

    alerts = RESOURCE_CATALOGUE[0]
    server.resource(
        ALERTS_URI,
        name=alerts["name"],
        description=alerts["description"],
        mime_type=alerts["mimeType"],
    )(market_alerts)

    return server


mcp: FastMCP = create_mcp_server()

__all__ = ["create_mcp_server", "mcp"]
