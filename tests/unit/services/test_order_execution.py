"""
Unit tests for order execution.

Covers BUY/SELL fills, weighted-average cost basis, rejection without
partial mutation, and the reduced simple mode.
"""

import pytest

from mock_broker.core.id_utils import is_valid_order_id
from mock_broker.schemas.accounts import create_default_account
from mock_broker.schemas.orders import OrderSide, OrderStatus
from mock_broker.services.order_execution import (
    OrderExecutionEngine,
    parse_quantity,
    parse_side,
)


def _snapshot(account):
    return account.model_dump()


@pytest.fixture
def account():
    return create_default_account()


class TestBuy:
    def test_tcs_buy_example(self, engine, account):
        result = engine.place_order(account, "TCS", 5, "BUY")

        assert result["status"] == "COMPLETE"
        assert result["executed_price"] == 3450.00
        assert result["message"] == "BUY order for 5 TCS executed at 3450.0"
        assert account.balance == 82750
        holding = account.find_holding("TCS")
        assert holding.qty == 15
        assert holding.price == pytest.approx(3416.67)

    def test_buy_new_symbol_adds_holding(self, engine, account):
        engine.place_order(account, "wipro", 10, "buy")

        holding = account.find_holding("WIPRO")
        assert holding.qty == 10
        assert holding.price == 460.00
        assert account.balance == 100000 - 4600

    def test_weighted_average_over_lots(self, engine, market, clock, account):
        lots = []
        for qty in (3, 7, 2, 11):
            result = engine.place_order(account, "HDFC", qty, "BUY")
            lots.append((qty, result["executed_price"]))
            clock.advance(6)
            market.refresh()

        total_qty = sum(q for q, _ in lots)
        expected = sum(q * p for q, p in lots) / total_qty
        holding = account.find_holding("HDFC")
        assert holding.qty == total_qty
        assert holding.price == pytest.approx(expected, abs=0.02)

    def test_insufficient_funds_leaves_account_untouched(self, engine, account):
        before = _snapshot(account)

        result = engine.place_order(account, "TCS", 1000, "BUY")

        assert result == {"status": "REJECTED", "reason": "Insufficient funds"}
        assert _snapshot(account) == before

    def test_buy_exactly_the_balance(self, engine, account):
        account.balance = 4600.0

        result = engine.place_order(account, "WIPRO", 10, "BUY")

        assert result["status"] == "COMPLETE"
        assert account.balance == 0


class TestSell:
    def test_partial_sell(self, engine, account):
        result = engine.place_order(account, "INFY", 5, "SELL")

        assert result["status"] == "COMPLETE"
        assert account.find_holding("INFY").qty == 10
        assert account.find_holding("INFY").price == 1500.0
        assert account.balance == 100000 + 5 * 1520.0

    def test_selling_full_quantity_removes_holding(self, engine, account):
        engine.place_order(account, "RELIANCE", 5, "SELL")

        assert account.find_holding("RELIANCE") is None
        assert [h.symbol for h in account.holdings] == ["TCS", "INFY"]

    def test_oversell_rejected(self, engine, account):
        before = _snapshot(account)

        result = engine.place_order(account, "RELIANCE", 6, "SELL")

        assert result == {"status": "REJECTED", "reason": "Insufficient holdings"}
        assert _snapshot(account) == before

    def test_sell_unheld_symbol_rejected(self, engine, account):
        result = engine.place_order(account, "HDFC", 1, "SELL")
        assert result["reason"] == "Insufficient holdings"


class TestValidation:
    def test_unknown_symbol(self, engine, account):
        before = _snapshot(account)

        result = engine.place_order(account, "ACME", 1, "BUY")

        assert result == {"status": "REJECTED", "reason": "Symbol not found"}
        assert _snapshot(account) == before

    @pytest.mark.parametrize(
        "qty", [0, -3, "abc", None, True, "1e400", float("inf"), float("nan")]
    )
    def test_invalid_quantity(self, engine, account, qty):
        result = engine.place_order(account, "TCS", qty, "BUY")
        assert result == {"status": "REJECTED", "reason": "Invalid quantity"}
        assert account.orders == []

    @pytest.mark.parametrize("side", ["HOLD", "", None, 1])
    def test_invalid_side(self, engine, account, side):
        result = engine.place_order(account, "TCS", 1, side)
        assert result == {"status": "REJECTED", "reason": "Invalid side"}

    def test_parse_helpers(self):
        assert parse_quantity("7") == 7
        assert parse_quantity(4.9) == 4
        assert parse_quantity("2.5") == 2
        assert parse_side(" sell ") is OrderSide.SELL


class TestOrderRecords:
    def test_orders_append_in_execution_order(self, engine, account):
        first = engine.place_order(account, "TCS", 1, "BUY")
        engine.place_order(account, "TCS", 1000, "BUY")  # rejected
        second = engine.place_order(account, "INFY", 2, "SELL")

        assert [o.id for o in account.orders] == [first["order_id"], second["order_id"]]
        order = account.orders[1]
        assert order.symbol == "INFY"
        assert order.side is OrderSide.SELL
        assert order.status is OrderStatus.COMPLETE
        assert order.price == 1520.0
        assert order.time.endswith("Z")
        assert is_valid_order_id(order.id)

    def test_execution_price_fallbacks(self, engine, market):
        assert engine.execution_price("TCS", 1.0) == 3450.00
        assert engine.execution_price("UNLISTED", 12.5) == 12.5
        assert engine.execution_price("UNLISTED", None) == 0.0
        assert engine.execution_price("UNLISTED", "junk") == 0.0


class TestSimpleMode:
    @pytest.fixture
    def simple_engine(self, market):
        return OrderExecutionEngine(market, enforce_limits=False)

    def test_buy_skips_funds_check(self, simple_engine, account):
        result = simple_engine.place_order(account, "TCS", 100, "BUY")

        assert result["status"] == "COMPLETE"
        assert account.balance == 100000 - 345000
        assert account.find_holding("TCS").qty == 110

    def test_sell_is_recorded_but_ignored(self, simple_engine, account):
        before_holdings = [h.model_dump() for h in account.holdings]

        result = simple_engine.place_order(account, "TCS", 50, "SELL")

        assert result["status"] == "COMPLETE"
        assert account.balance == 100000
        assert [h.model_dump() for h in account.holdings] == before_holdings
        assert len(account.orders) == 1

    def test_unknown_symbol_still_rejected(self, simple_engine, account):
        result = simple_engine.place_order(account, "ACME", 1, "BUY")
        assert result["reason"] == "Symbol not found"
