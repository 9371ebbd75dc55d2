"""
Pydantic schemas for accounts, orders and market data.
"""

from .accounts import Account, Holding, create_default_account
from .market import Instrument, NewsItem, OHLCBar, Trend
from .orders import Order, OrderSide, OrderStatus

__all__ = [
    "Account",
    "Holding",
    "Instrument",
    "NewsItem",
    "OHLCBar",
    "Order",
    "OrderSide",
    "OrderStatus",
    "Trend",
    "create_default_account",
]
