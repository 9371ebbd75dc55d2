"""
Published tool and resource catalogue.

Served verbatim by ``tools/list`` and ``resources/list``. The dispatcher
checks its handler registry against ``TOOL_NAMES`` at construction.
"""

from typing import Any

_EMPTY_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}

TOOL_CATALOGUE: list[dict[str, Any]] = [
    {
        "name": "init",
        "description": "Reset session and create new account. Use this to start fresh.",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get-account",
        "description": "Get current available balance and funds.",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get-portfolio",
        "description": "Get balance, holdings with live prices and total portfolio value.",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get-holdings",
        "description": "Get list of stocks currently owned in portfolio.",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get-orders",
        "description": "Get history of all orders placed.",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get-history",
        "description": "Get historical OHLC price data for analysis.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "symbol": {"type": "string", "description": "Stock symbol"},
                "days": {
                    "type": "number",
                    "description": "Number of days (default 30)",
                },
            },
            "required": ["symbol"],
        },
    },
    {
        "name": "place-order",
        "description": "Place a buy or sell order for a stock.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "symbol": {
                    "type": "string",
                    "description": "Stock symbol (e.g. TCS, RELIANCE)",
                },
                "qty": {"type": "number", "description": "Quantity to buy/sell"},
                "side": {
                    "type": "string",
                    "enum": ["BUY", "SELL"],
                    "description": "Order side",
                },
                "price": {
                    "type": "number",
                    "description": "Limit price (0 for market)",
                },
            },
            "required": ["symbol", "qty", "side"],
        },
    },
    {
        "name": "get-quote",
        "description": "Get live price and depth for a stock.",
        "inputSchema": {
            "type": "object",
            "properties": {"symbol": {"type": "string", "description": "Stock symbol"}},
            "required": ["symbol"],
        },
    },
    {
        "name": "get-market-news",
        "description": "Get latest financial news headlines and market sentiment.",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get-market-status",
        "description": "Get overall market status, top gainers/losers, and index levels.",
        "inputSchema": _EMPTY_SCHEMA,
    },
]

TOOL_NAMES: frozenset[str] = frozenset(tool["name"] for tool in TOOL_CATALOGUE)

ALERTS_URI = "market://alerts"

RESOURCE_CATALOGUE: list[dict[str, Any]] = [
    {
        "uri": ALERTS_URI,
        "name": "Market Alerts",
        "description": "Real-time market alerts and significant events summary",
        "mimeType": "text/plain",
    }
]
