"""
Order execution against the simulated market.

Orders fill immediately at the current market price. Validation runs
before any balance or holdings write, so a rejected order leaves the
account untouched.
"""

import logging
import random
from datetime import UTC, datetime
from typing import Any

from ..core.id_utils import generate_order_id
from ..schemas.accounts import Account, Holding
from ..schemas.orders import Order, OrderSide, OrderStatus
from .market import MarketModel

logger = logging.getLogger(__name__)

REJECT_SYMBOL_NOT_FOUND = "Symbol not found"
REJECT_INSUFFICIENT_FUNDS = "Insufficient funds"
REJECT_INSUFFICIENT_HOLDINGS = "Insufficient holdings"
REJECT_INVALID_QUANTITY = "Invalid quantity"
REJECT_INVALID_SIDE = "Invalid side"


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_quantity(value: Any) -> int | None:
    """Parse an order quantity, returning None when it is not a positive integer."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        qty = int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return qty if qty > 0 else None


def parse_side(value: Any) -> OrderSide | None:
    if not isinstance(value, str):
        return None
    try:
        return OrderSide(value.strip().upper())
    except ValueError:
        return None


def rejected(reason: str) -> dict[str, Any]:
    return {"status": OrderStatus.REJECTED.value, "reason": reason}


class OrderExecutionEngine:
    """
    Fills market orders for an account.

    With ``enforce_limits`` disabled the engine runs in the reduced
    "simple" mode: BUY orders skip the funds check and SELL orders are
    recorded without touching balance or holdings.
    """

    def __init__(
        self,
        market: MarketModel,
        enforce_limits: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self.market = market
        self.enforce_limits = enforce_limits
        self.rng = rng

    def execution_price(self, symbol: str, requested_price: Any = None) -> float:
        market_price = self.market.price_of(symbol)
        if market_price:
            return market_price
        try:
            return float(requested_price) if requested_price else 0.0
        except (TypeError, ValueError):
            return 0.0

    def place_order(
        self,
        account: Account,
        symbol: str,
        qty: Any,
        side: Any,
        price: Any = None,
    ) -> dict[str, Any]:
        """Validate and fill an order, returning a confirmation or rejection."""
        symbol = symbol.strip().upper()

        if not self.market.has_symbol(symbol):
            logger.info("Order rejected for %s: %s", symbol, REJECT_SYMBOL_NOT_FOUND)
            return rejected(REJECT_SYMBOL_NOT_FOUND)

        quantity = parse_quantity(qty)
        if quantity is None:
            return rejected(REJECT_INVALID_QUANTITY)

        order_side = parse_side(side)
        if order_side is None:
            return rejected(REJECT_INVALID_SIDE)

        exec_price = self.execution_price(symbol, price)
        order_value = quantity * exec_price

        if order_side is OrderSide.BUY:
            if self.enforce_limits and account.balance < order_value:
                logger.info(
                    "BUY %d %s rejected: needs %.2f, balance %.2f",
                    quantity,
                    symbol,
                    order_value,
                    account.balance,
                )
                return rejected(REJECT_INSUFFICIENT_FUNDS)
            self._apply_buy(account, symbol, quantity, exec_price)
        elif self.enforce_limits:
            holding = account.find_holding(symbol)
            if holding is None or holding.qty < quantity:
                logger.info("SELL %d %s rejected: insufficient holdings", quantity, symbol)
                return rejected(REJECT_INSUFFICIENT_HOLDINGS)
            self._apply_sell(account, holding, quantity, exec_price)

        order = Order(
            id=generate_order_id(self.rng),
            symbol=symbol,
            qty=quantity,
            side=order_side,
            price=exec_price,
            status=OrderStatus.COMPLETE,
            time=_utc_timestamp(),
        )
        account.orders.append(order)
        logger.info(
            "%s order %s for %d %s executed at %.2f",
            order_side.value,
            order.id,
            quantity,
            symbol,
            exec_price,
        )

        return {
            "status": OrderStatus.COMPLETE.value,
            "order_id": order.id,
            "executed_price": exec_price,
            "message": f"{order_side.value} order for {quantity} {symbol} executed at {exec_price}",
        }

    @staticmethod
    def _apply_buy(account: Account, symbol: str, qty: int, price: float) -> None:
        order_value = qty * price
        account.balance = round(account.balance - order_value, 2)

        existing = account.find_holding(symbol)
        if existing is None:
            account.holdings.append(Holding(symbol=symbol, qty=qty, price=price))
            return

        # Weighted-average cost basis across the old and new lots
        total_cost = existing.qty * existing.price + order_value
        existing.qty += qty
        existing.price = round(total_cost / existing.qty, 2)

    @staticmethod
    def _apply_sell(account: Account, holding: Holding, qty: int, price: float) -> None:
        account.balance = round(account.balance + qty * price, 2)
        holding.qty -= qty
        if holding.qty == 0:
            account.remove_holding(holding.symbol)
