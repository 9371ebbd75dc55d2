"""
Account and holding schemas.

This module contains the in-memory account state for a session:
- Holding: a position in one instrument with average cost
- Account: cash balance, holdings and the append-only order history
"""

from pydantic import BaseModel, Field, field_validator

from .orders import Order

DEFAULT_STARTING_BALANCE = 100000.0

DEFAULT_HOLDINGS: tuple[tuple[str, int, float], ...] = (
    ("TCS", 10, 3400.0),
    ("RELIANCE", 5, 2800.0),
    ("INFY", 15, 1500.0),
)


class Holding(BaseModel):
    """Position in one instrument."""

    symbol: str = Field(..., description="Stock symbol")
    qty: int = Field(..., ge=0, description="Number of shares held")
    price: float = Field(..., description="Average purchase price (cost basis)")

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()

    def unrealized_pnl(self, current_price: float) -> float:
        return round((current_price - self.price) * self.qty, 2)


class Account(BaseModel):
    """Mock brokerage account owned by one session."""

    balance: float = Field(..., description="Available cash (INR)")
    holdings: list[Holding] = Field(default_factory=list)
    orders: list[Order] = Field(default_factory=list)

    def find_holding(self, symbol: str) -> Holding | None:
        symbol = symbol.upper()
        for holding in self.holdings:
            if holding.symbol == symbol:
                return holding
        return None

    def remove_holding(self, symbol: str) -> None:
        symbol = symbol.upper()
        self.holdings = [h for h in self.holdings if h.symbol != symbol]


def create_default_account(
    starting_balance: float = DEFAULT_STARTING_BALANCE,
) -> Account:
    """Create a freshly seeded account with the preset holdings."""
    return Account(
        balance=starting_balance,
        holdings=[
            Holding(symbol=symbol, qty=qty, price=price)
            for symbol, qty, price in DEFAULT_HOLDINGS
        ],
        orders=[],
    )
