"""
Tool dispatcher: maps (tool name, arguments, session) to a result dict.

The dispatcher itself holds no account or market state; everything lives
in the injected MarketModel and AccountStore. Business rejections come back
as payloads, while unknown tools and malformed arguments raise.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from ..core.exceptions import NotFoundError, UnknownToolError, ValidationError
from ..mcp.catalogue import TOOL_NAMES
from ..schemas.accounts import Account
from .accounts import AccountStore
from .market import MarketModel
from .order_execution import OrderExecutionEngine

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DAYS = 30
DEPTH_BID_FACTOR = 0.999
DEPTH_ASK_FACTOR = 1.001
DEPTH_BID_QTY = 100
DEPTH_ASK_QTY = 150

ToolHandler = Callable[[str, Account, Mapping[str, Any]], dict[str, Any]]


def _require_symbol(params: Mapping[str, Any]) -> str:
    symbol = params.get("symbol")
    if not isinstance(symbol, str) or not symbol.strip():
        raise ValidationError("Missing required argument: symbol")
    return symbol.strip().upper()


def _parse_days(value: Any) -> int:
    if not value:
        return DEFAULT_HISTORY_DAYS
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValidationError(f"Invalid days: {value!r}") from e


class ToolDispatcher:
    """Executes named tools against the market and account store."""

    def __init__(
        self,
        market: MarketModel,
        accounts: AccountStore,
        execution: OrderExecutionEngine | None = None,
        catalogue_names: frozenset[str] = TOOL_NAMES,
    ) -> None:
        self.market = market
        self.accounts = accounts
        self.execution = execution or OrderExecutionEngine(market)
        self._lock = threading.RLock()

        self._handlers: dict[str, ToolHandler] = {
            "init": self._init,
            "get-account": self._get_account,
            "get-portfolio": self._get_portfolio,
            "get-holdings": self._get_holdings,
            "get-orders": self._get_orders,
            "get-history": self._get_history,
            "get-quote": self._get_quote,
            "get-market-news": self._get_market_news,
            "get-market-status": self._get_market_status,
            "place-order": self._place_order,
        }

        missing = catalogue_names - self._handlers.keys()
        unpublished = self._handlers.keys() - catalogue_names
        if missing or unpublished:
            raise RuntimeError(
                "Tool registry out of sync with catalogue: "
                f"missing handlers {sorted(missing)}, unpublished handlers {sorted(unpublished)}"
            )

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def execute(
        self,
        tool_name: str,
        params: Mapping[str, Any] | None = None,
        session_id: str | None = None,
    ) -> dict[str, Any]:
        """Run a tool for a session.

        Raises:
            UnknownToolError: If no handler is registered for ``tool_name``
            ValidationError: If required arguments are missing or malformed
        """
        params = params or {}
        with self._lock:
            self.market.refresh()
            logger.info("Executing tool %s for session %s", tool_name, session_id)

            handler = self._handlers.get(tool_name)
            if handler is None:
                raise UnknownToolError(tool_name)

            resolved_id, account = self.accounts.get(session_id)
            return handler(resolved_id, account, params)

    # ------------------------------------------------------------------
    # Account tools
    # ------------------------------------------------------------------

    def _init(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        fresh = self.accounts.reset(session_id)
        return {
            "message": "Account reset successful. Market is open.",
            "balance": fresh.balance,
            "market_status": "OPEN",
        }

    def _get_account(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "id": session_id,
            "balance": account.balance,
            "currency": "INR",
            "status": "ACTIVE",
        }

    def _annotated_holdings(self, account: Account) -> list[dict[str, Any]]:
        holdings = []
        for holding in account.holdings:
            current_price = self.market.price_of(holding.symbol) or holding.price
            holdings.append(
                {
                    **holding.model_dump(),
                    "current_price": current_price,
                    "pnl": holding.unrealized_pnl(current_price),
                }
            )
        return holdings

    def _get_holdings(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        return {"holdings": self._annotated_holdings(account)}

    def _get_portfolio(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        holdings = self._annotated_holdings(account)
        holdings_value = round(sum(h["current_price"] * h["qty"] for h in holdings), 2)
        return {
            "id": session_id,
            "balance": account.balance,
            "currency": "INR",
            "holdings": holdings,
            "holdings_value": holdings_value,
            "total_value": round(account.balance + holdings_value, 2),
        }

    def _get_orders(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        return {"orders": [order.model_dump(mode="json") for order in account.orders]}

    def _place_order(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        symbol = _require_symbol(params)
        if params.get("qty") is None:
            raise ValidationError("Missing required argument: qty")
        # "type" is accepted as a legacy alias for "side"
        side = params.get("side") or params.get("type")
        return self.execution.place_order(
            account, symbol, params.get("qty"), side, params.get("price")
        )

    # ------------------------------------------------------------------
    # Market tools
    # ------------------------------------------------------------------

    def _get_history(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        symbol = _require_symbol(params)
        days = _parse_days(params.get("days"))
        try:
            bars = self.market.history(symbol, days)
        except NotFoundError as e:
            return {"error": e.detail}
        return {"symbol": symbol, "history": [bar.model_dump() for bar in bars]}

    def _get_quote(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        symbol = _require_symbol(params)
        try:
            instrument = self.market.quote(symbol)
        except NotFoundError as e:
            return {"error": e.detail}
        return {
            "symbol": symbol,
            "price": instrument.price,
            "trend": instrument.trend.value,
            "depth": {
                "buy": [
                    {"price": round(instrument.price * DEPTH_BID_FACTOR, 2), "qty": DEPTH_BID_QTY}
                ],
                "sell": [
                    {"price": round(instrument.price * DEPTH_ASK_FACTOR, 2), "qty": DEPTH_ASK_QTY}
                ],
            },
        }

    def _get_market_news(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        return self.market.news()

    def _get_market_status(self, session_id: str, account: Account, params: Mapping[str, Any]) -> dict[str, Any]:
        return self.market.status()
