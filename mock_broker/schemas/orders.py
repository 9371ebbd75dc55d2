"""
Order-related schemas.

Orders are immutable records appended to an account's order history.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderSide(str, Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"


class OrderStatus(str, Enum):
    """Order status values."""

    COMPLETE = "COMPLETE"
    REJECTED = "REJECTED"


class Order(BaseModel):
    """An executed order."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Order identifier")
    symbol: str = Field(..., description="Stock symbol (e.g., TCS, INFY)")
    qty: int = Field(..., gt=0, description="Number of shares")
    side: OrderSide = Field(..., description="BUY or SELL")
    price: float = Field(..., ge=0, description="Execution price")
    status: OrderStatus = Field(default=OrderStatus.COMPLETE)
    time: str = Field(..., description="Execution timestamp (ISO-8601)")

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()
