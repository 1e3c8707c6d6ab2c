"""
Mock Data Generator

Generates deterministic mock candle data for development and testing.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from pivot_supertrend.schemas.market import Candle, TickerData, Timeframe
from pivot_supertrend.services.base import DataUnavailableError
from pivot_supertrend.services.data_ingestion.interface import TickerProvider


# Base prices for common symbols
SYMBOL_BASE_PRICES = {
    "AAPL": 190.0,
    "MSFT": 410.0,
    "SPY": 500.0,
    "BTC-USD": 42000.0,
    "ETH-USD": 2300.0,
}

# Timeframe to milliseconds
TIMEFRAME_MS = {
    Timeframe.M1: 60_000,
    Timeframe.M5: 300_000,
    Timeframe.M15: 900_000,
    Timeframe.M30: 1_800_000,
    Timeframe.H1: 3_600_000,
    Timeframe.H4: 14_400_000,
    Timeframe.D1: 86_400_000,
    Timeframe.W1: 604_800_000,
}


def get_base_price(symbol: str) -> float:
    """Get base price for a symbol."""
    return SYMBOL_BASE_PRICES.get(symbol, 100.0)


def generate_mock_candles(
    symbol: str,
    count: int,
    timeframe: Timeframe = Timeframe.D1,
    end_time: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> list[Candle]:
    """Generate a random-walk candle history; the same seed gives the same candles."""
    rng = random.Random(seed if seed is not None else symbol)
    if end_time is None:
        end_time = datetime(2024, 1, 1, tzinfo=timezone.utc)

    candles = []
    interval_ms = TIMEFRAME_MS[timeframe]
    price = get_base_price(symbol)
    volatility = price * 0.02  # 2% volatility

    timestamp = end_time - timedelta(milliseconds=interval_ms * count)

    for _ in range(count):
        # Random walk
        change = (rng.random() - 0.5) * volatility

        open_price = price
        close_price = open_price + change
        high_price = max(open_price, close_price) + rng.random() * volatility * 0.5
        low_price = min(open_price, close_price) - rng.random() * volatility * 0.5

        candles.append(
            Candle(
                timestamp=timestamp,
                open=round(open_price, 2),
                high=round(high_price, 2),
                low=round(low_price, 2),
                close=round(close_price, 2),
                volume=float(rng.randint(100_000, 5_000_000)),
            )
        )

        price = close_price
        timestamp += timedelta(milliseconds=interval_ms)

    return candles


class InMemoryTickerProvider(TickerProvider):
    """Ticker lookup over a fixed mapping of name -> TickerData."""

    def __init__(self, tickers: Optional[dict[str, TickerData]] = None):
        self._tickers = dict(tickers or {})

    def add(self, name: str, data: TickerData) -> None:
        self._tickers[name] = data

    async def get_ticker(self, name: str) -> TickerData:
        data = self._tickers.get(name)
        if data is None:
            raise DataUnavailableError(self.name, name, "not found")
        if not data.candles:
            raise DataUnavailableError(self.name, name, "empty series")
        return data


class MockTickerProvider(TickerProvider):
    """Ticker lookup that synthesizes candles for any name."""

    def __init__(self, count: int = 300, timeframe: Timeframe = Timeframe.D1):
        self.count = count
        self.timeframe = timeframe

    async def get_ticker(self, name: str) -> TickerData:
        symbol = name.upper().strip()
        if not symbol:
            raise DataUnavailableError(self.name, name, "empty ticker name")
        candles = generate_mock_candles(symbol, self.count, self.timeframe)
        if not candles:
            raise DataUnavailableError(self.name, name, "empty series")
        return TickerData(symbol=symbol, candles=candles, timeframe=self.timeframe)
