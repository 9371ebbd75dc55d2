"""
Simulated market shared by every session.

Prices drift on a time-gated tick: callers within the same refresh window
all observe the same cached prices. The random source and clock are
injectable so the simulation can be made deterministic.
"""

import logging
import math
import random
import time
from collections.abc import Callable, Iterable, Mapping
from datetime import date, timedelta
from typing import Any

from ..core.exceptions import SymbolNotFoundError, ValidationError
from ..schemas.market import Instrument, NewsItem, OHLCBar, Trend

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 5.0
MAX_TICK_MOVE = 5.0
DAILY_VOLATILITY = 0.02
BASE_INDEX_LEVEL = 18500.0
MIN_VOLUME = 50_000
VOLUME_RANGE = 1_000_000
MAX_HISTORY_DAYS = 3650

DEFAULT_INSTRUMENTS: dict[str, tuple[float, Trend]] = {
    "TCS": (3450.00, Trend.UP),
    "RELIANCE": (2850.00, Trend.FLAT),
    "INFY": (1520.00, Trend.DOWN),
    "HDFC": (1680.00, Trend.UP),
    "WIPRO": (460.00, Trend.DOWN),
    "TATAMOTORS": (980.00, Trend.UP),
}

DEFAULT_NEWS: tuple[tuple[str, str, str], ...] = (
    ("TCS bags $1B deal from UK insurer", "POSITIVE", "TCS"),
    ("Reliance expected to post weak quarterly results", "NEGATIVE", "RELIANCE"),
    ("Tech sector rally continues as Nasdaq surges", "POSITIVE", "INFY"),
    ("Auto sales drop 5% in March", "NEGATIVE", "TATAMOTORS"),
)


class MarketModel:
    """Process-wide simulated instrument prices and news."""

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        instruments: Mapping[str, Instrument] | None = None,
        news: Iterable[NewsItem] | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.clock = clock or time.time
        self.refresh_interval = refresh_interval

        if instruments is None:
            self.instruments = {
                symbol: Instrument(price=price, trend=trend)
                for symbol, (price, trend) in DEFAULT_INSTRUMENTS.items()
            }
        else:
            self.instruments = {
                symbol.upper(): inst.model_copy() for symbol, inst in instruments.items()
            }

        if news is None:
            self.headlines = [
                NewsItem(headline=headline, sentiment=sentiment, symbol=symbol)
                for headline, sentiment, symbol in DEFAULT_NEWS
            ]
        else:
            self.headlines = list(news)

        self.last_update = self.clock()

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------

    def refresh(self) -> bool:
        """Advance prices if the refresh window has elapsed.

        Returns:
            True if a tick was applied, False if still inside the window
        """
        now = self.clock()
        if now - self.last_update <= self.refresh_interval:
            return False

        for instrument in self.instruments.values():
            move = (self.rng.random() - 0.5) * (MAX_TICK_MOVE * 2)
            instrument.price = round(instrument.price + move, 2)
            instrument.trend = Trend.UP if move > 0 else Trend.DOWN

        self.last_update = now
        logger.info("Market prices updated for %d symbols", len(self.instruments))
        return True

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def has_symbol(self, symbol: str) -> bool:
        return symbol.upper() in self.instruments

    def price_of(self, symbol: str) -> float | None:
        instrument = self.instruments.get(symbol.upper())
        return instrument.price if instrument else None

    def _require(self, symbol: str) -> Instrument:
        instrument = self.instruments.get(symbol.upper())
        if instrument is None:
            raise SymbolNotFoundError(symbol.upper())
        return instrument

    def quote(self, symbol: str) -> Instrument:
        """Current price and trend for a symbol."""
        self.refresh()
        return self._require(symbol)

    def history(
        self, symbol: str, days: int = 30, today: date | None = None
    ) -> list[OHLCBar]:
        """Generate synthetic daily OHLC bars ending at the current price.

        Bars are generated newest-first by walking backwards from the
        current price (each day's close is the following day's open) and
        returned oldest-first.
        """
        instrument = self._require(symbol)
        if not 1 <= days <= MAX_HISTORY_DAYS:
            raise ValidationError(f"days must be between 1 and {MAX_HISTORY_DAYS}")

        today = today or date.today()
        bars: list[OHLCBar] = []
        current_close = instrument.price

        for i in range(days):
            volatility = current_close * DAILY_VOLATILITY
            change = (self.rng.random() - 0.5) * volatility
            open_price = current_close - change
            close = current_close
            high = max(open_price, close) + self.rng.random() * volatility * 0.5
            low = min(open_price, close) - self.rng.random() * volatility * 0.5
            volume = math.floor(self.rng.random() * VOLUME_RANGE) + MIN_VOLUME

            bars.append(
                OHLCBar(
                    date=(today - timedelta(days=i)).isoformat(),
                    open=round(open_price, 2),
                    high=round(high, 2),
                    low=round(low, 2),
                    close=round(close, 2),
                    volume=volume,
                )
            )
            current_close = open_price

        bars.reverse()
        return bars

    def status(self) -> dict[str, Any]:
        """Aggregate market view with top gainer and loser by price."""
        ranked = sorted(
            self.instruments.items(), key=lambda item: item[1].price, reverse=True
        )
        return {
            "status": "OPEN",
            "index_level": BASE_INDEX_LEVEL + self.rng.random() * 100,
            "top_gainer": ranked[0][0] if ranked else None,
            "top_loser": ranked[-1][0] if ranked else None,
            "active_symbols": list(self.instruments),
        }

    def news(self) -> dict[str, Any]:
        return {
            "headlines": [item.model_dump() for item in self.headlines],
            "sentiment": "MIXED",
        }

    def alerts_digest(self) -> str:
        """Plain-text digest of the current headlines."""
        lines = [
            f"[{item.sentiment}] {item.symbol}: {item.headline}"
            for item in self.headlines
        ]
        return "=== MARKET ALERTS ===\n" + "\n".join(lines) + "\n====================="
