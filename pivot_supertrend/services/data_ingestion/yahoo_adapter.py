"""
Yahoo Finance Ticker Provider

Fetches REAL candle history from Yahoo Finance.
"""

import logging
from datetime import timezone

import yfinance as yf

from pivot_supertrend.schemas.market import Candle, TickerData, Timeframe
from pivot_supertrend.services.base import DataUnavailableError
from pivot_supertrend.services.data_ingestion.interface import TickerProvider

logger = logging.getLogger(__name__)


# Timeframe mapping for yfinance
TIMEFRAME_MAP = {
    Timeframe.M1: "1m",
    Timeframe.M5: "5m",
    Timeframe.M15: "15m",
    Timeframe.M30: "30m",
    Timeframe.H1: "1h",
    Timeframe.H4: "4h",
    Timeframe.D1: "1d",
    Timeframe.W1: "1wk",
}

# Period mapping based on timeframe (intraday history is capped by Yahoo)
PERIOD_MAP = {
    Timeframe.M1: "7d",
    Timeframe.M5: "60d",
    Timeframe.M15: "60d",
    Timeframe.M30: "60d",
    Timeframe.H1: "2y",
    Timeframe.H4: "2y",
    Timeframe.D1: "5y",
    Timeframe.W1: "max",
}


def get_history_period(timeframe: Timeframe, lookback: int) -> str:
    """Smallest yfinance period covering ``lookback`` candles."""
    # For daily data: 252 trading days per year
    if timeframe == Timeframe.D1:
        if lookback <= 252:
            return "1y"
        elif lookback <= 504:
            return "2y"
        elif lookback <= 1260:
            return "5y"
        return "max"
    if timeframe == Timeframe.W1:
        return "5y" if lookback <= 260 else "max"
    return PERIOD_MAP.get(timeframe, "1y")


class YahooTickerProvider(TickerProvider):
    """Ticker lookup backed by yfinance."""

    def __init__(self, timeframe: Timeframe = Timeframe.D1, lookback: int = 300):
        self.timeframe = timeframe
        self.lookback = lookback

    async def get_ticker(self, name: str) -> TickerData:
        """
        Fetch candle history from Yahoo Finance.

        Args:
            name: Yahoo symbol (e.g., "AAPL", "BTC-USD", "RELIANCE.NS")

        Returns:
            TickerData with the trailing ``lookback`` candles

        Raises:
            DataUnavailableError: fetch failed or returned no candles
        """
        symbol = name.upper().strip()
        interval = TIMEFRAME_MAP.get(self.timeframe, "1d")
        period = get_history_period(self.timeframe, self.lookback)

        try:
            logger.info(f"Fetching {symbol} from Yahoo Finance ({interval}, {period})...")
            hist = yf.Ticker(symbol).history(period=period, interval=interval)
        except Exception as e:
            logger.error(f"Error fetching {symbol} from Yahoo Finance: {e}")
            raise DataUnavailableError(self.name, symbol, str(e)) from e

        if hist is None or hist.empty:
            logger.warning(f"No data returned for {symbol}")
            raise DataUnavailableError(self.name, symbol, "no candles returned")

        hist = hist.tail(self.lookback)

        candles = []
        for idx, row in hist.iterrows():
            ts = idx.to_pydatetime()
            if ts.tzinfo is None:
                ts = ts.replace(tzinfo=timezone.utc)
            else:
                ts = ts.astimezone(timezone.utc)
            candles.append(
                Candle(
                    timestamp=ts,
                    open=float(row["Open"]),
                    high=float(row["High"]),
                    low=float(row["Low"]),
                    close=float(row["Close"]),
                    volume=float(row["Volume"]),
                )
            )

        logger.info(f"Got {len(candles)} candles for {symbol}")
        return TickerData(symbol=symbol, candles=candles, timeframe=self.timeframe)
