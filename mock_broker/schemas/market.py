"""
Market data schemas: instruments, news headlines and OHLC bars.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Trend(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    FLAT = "FLAT"


class Instrument(BaseModel):
    """Simulated state of a single tradable symbol."""

    price: float = Field(..., description="Last traded price")
    trend: Trend = Field(default=Trend.FLAT, description="Direction of the last tick")


class NewsItem(BaseModel):
    headline: str
    sentiment: str = Field(..., description="POSITIVE, NEGATIVE or NEUTRAL")
    symbol: str


class OHLCBar(BaseModel):
    """One day of synthetic price history."""

    date: str = Field(..., description="Trading date (YYYY-MM-DD)")
    open: float
    high: float
    low: float
    close: float
    volume: int
